"""Page object compiler.

Converts declarative page object documents (JSON) to PageObjectIR and then
to generated interface and implementation source.

The translation pipeline:
  1. JSON document -> load_page_object -> PageObjectSpec (pydantic models)
  2. PageObjectSpec -> PageObjectTranslator -> PageObjectIR
  3. PageObjectIR -> writer -> interface and implementation source files

Compose methods are compiled statement by statement by
compiler.ComposeMethodBuilder.
"""

from .errors import CompilerError
from .grammar import PageObjectSpec, load_page_object
from .ir import PageObjectIR
from .translator import PageObjectTranslator, translate_page_object
from .writer import render_implementation, render_interface, write_page_object

__all__ = [
    "CompilerError",
    "PageObjectIR",
    "PageObjectSpec",
    "PageObjectTranslator",
    "load_page_object",
    "render_implementation",
    "render_interface",
    "translate_page_object",
    "write_page_object",
]
