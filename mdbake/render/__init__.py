"""Rendering subsystem: conversion options and the markdown renderer."""

from mdbake.render.options import (
    ConversionOptions,
    ExtensionOptions,
    ParseOptions,
    Profile,
    load_stylesheet,
    load_trailer,
    options_from_config,
    style_block,
)
from mdbake.render.renderer import MarkdownRenderer, Renderer, build_extensions

__all__ = [
    "ConversionOptions",
    "ExtensionOptions",
    "MarkdownRenderer",
    "ParseOptions",
    "Profile",
    "Renderer",
    "build_extensions",
    "load_stylesheet",
    "load_trailer",
    "options_from_config",
    "style_block",
]
