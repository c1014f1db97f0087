"""Ahead-of-time route module generation.

Public API::

    from fileroutes.codegen import generate, load_virtual_module

    generate(config)              # write src/generated_routes.py
    load_virtual_module(config)   # or keep it in memory as ``generated_routes``
"""

from fileroutes.codegen.generator import (
    REGISTER_FUNCTION,
    GeneratedModule,
    build_module,
    generate,
    render_module,
    write_module,
)
from fileroutes.codegen.virtual import VIRTUAL_MODULE_ID, VIRTUAL_MODULE_NAME, load_virtual_module

__all__ = [
    "REGISTER_FUNCTION",
    "VIRTUAL_MODULE_ID",
    "VIRTUAL_MODULE_NAME",
    "GeneratedModule",
    "build_module",
    "generate",
    "load_virtual_module",
    "render_module",
    "write_module",
]
