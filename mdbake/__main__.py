from mdbake.cli import app

app(prog_name="mdbake")
