"""Static fragments bundled with mdbake."""
