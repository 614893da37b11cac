"""Source writer - PageObjectIR to interface and implementation source.

For page object ``my.app.pageobjects.Home`` the writer produces:
- ``my/app/pageobjects/Home.java``: public interface with public methods and
  public element getters
- ``my/app/pageobjects/impl/HomeImpl.java``: implementation class with element
  fields, getters and method bodies
"""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import WriterError
from .grammar import ROOT_ELEMENT
from .ir import ElementGetter, PageObjectIR, PageObjectMethod
from .types import ConcreteType, ListOfType, TypeValue

logger = logging.getLogger(__name__)

INDENT = "  "
IMPL_PACKAGE = "impl"

# Framework types referenced by generated source
BASE_INTERFACE = "utam.core.framework.base.PageObject"
ROOT_INTERFACE = "utam.core.framework.base.RootPageObject"
BASE_CLASS = "utam.core.framework.base.BasePageObject"
ELEMENT_MARKER = "utam.core.framework.base.ElementMarker"
PAGE_MARKER = "utam.core.framework.base.PageMarker"
ELEMENT_LOCATION = "utam.core.element.ElementLocation"
BASIC_ELEMENT = "utam.core.element.BasicElement"
COLLECTORS = "java.util.stream.Collectors"
LIST = "java.util.List"

# Generated element interfaces extend these framework interfaces
ELEMENT_INTERFACES = {
    "actionable": "utam.core.element.Actionable",
    "clickable": "utam.core.element.Clickable",
    "editable": "utam.core.element.Editable",
    "touchable": "utam.core.element.Touchable",
}


def _simple(full_name: str) -> str:
    return full_name.rsplit(".", 1)[-1]


def _field_name(getter: ElementGetter) -> str:
    return getter.element_name


def _is_custom(type_value: TypeValue) -> bool:
    return isinstance(type_value, ConcreteType) and type_value.is_custom


def _type_imports(type_value: TypeValue, own_package: str) -> set[str]:
    """Imports needed to reference a type from ``own_package``."""
    if isinstance(type_value, ListOfType):
        return {LIST} | _type_imports(type_value.element, own_package)
    if _is_custom(type_value) and type_value.package != own_package:
        return {type_value.full_name}
    return set()


def _method_imports(method: PageObjectMethod, own_package: str) -> set[str]:
    imports = _type_imports(method.declaration.return_type, own_package)
    for parameter in method.declaration.parameters:
        imports |= _type_imports(parameter.type, own_package)
    return imports


def _render_imports(imports: set[str]) -> list[str]:
    return [f"import {name};" for name in sorted(imports)]


def _render_javadoc(text: str | None, indent: str = "") -> list[str]:
    if not text:
        return []
    return [f"{indent}/**", *(f"{indent} * {line}" for line in text.splitlines()), f"{indent} */"]


def _render_body(method: PageObjectMethod, indent: str) -> list[str]:
    """Method body lines; predicate closures span several lines."""
    lines = []
    for code_line in method.code_lines:
        parts = f"{code_line};".split("\n")
        lines.append(f"{indent}{parts[0]}")
        inner = indent + INDENT
        for part in parts[1:-1]:
            lines.append(f"{inner}{part}")
        if len(parts) > 1:
            lines.append(f"{indent}{parts[-1]}")
    return lines


def _element_interfaces(ir: PageObjectIR) -> list[ElementGetter]:
    """Getters whose type is a generated basic element interface."""
    seen: set[str] = set()
    getters = []
    for getter in ir.elements:
        element_type = getter.return_type
        if isinstance(element_type, ListOfType):
            element_type = element_type.element
        if element_type.name in seen or _is_custom(element_type):
            continue
        seen.add(element_type.name)
        getters.append(getter)
    return getters


def _element_type(getter: ElementGetter) -> ConcreteType:
    if isinstance(getter.return_type, ListOfType):
        return getter.return_type.element
    return getter.return_type


def render_interface(ir: PageObjectIR) -> str:
    """Render the public interface of a page object."""
    imports = {ROOT_INTERFACE if ir.is_root else BASE_INTERFACE, BASIC_ELEMENT}
    public_methods = [m for m in ir.methods if m.is_public]
    for method in public_methods:
        imports |= _method_imports(method, ir.package)
    public_elements = [e for e in ir.public_elements() if e.element_name != ROOT_ELEMENT]
    for getter in public_elements:
        imports |= _type_imports(getter.return_type, ir.package)
    for getter in _element_interfaces(ir):
        imports |= {ELEMENT_INTERFACES[i] for i in getter.interfaces if i in ELEMENT_INTERFACES}

    lines = []
    if ir.package:
        lines += [f"package {ir.package};", ""]
    lines += _render_imports(imports)
    lines.append("")
    lines += _render_javadoc(ir.description)
    base = _simple(ROOT_INTERFACE if ir.is_root else BASE_INTERFACE)
    lines.append(f"public interface {ir.name} extends {base} {{")

    for method in public_methods:
        lines.append("")
        lines += _render_javadoc(method.description, INDENT)
        lines.append(f"{INDENT}{method.declaration.code_line};")

    for getter in public_elements:
        lines += ["", f"{INDENT}{getter.declaration};"]

    if ir.expose_root_element:
        lines += ["", f"{INDENT}RootElement getRoot();"]

    for getter in _element_interfaces(ir):
        element_type = _element_type(getter)
        parents = [_simple(BASIC_ELEMENT)] + [
            _simple(ELEMENT_INTERFACES[i]) for i in getter.interfaces if i in ELEMENT_INTERFACES
        ]
        lines += ["", f"{INDENT}interface {element_type.name} extends {', '.join(parents)} {{}}"]

    lines.append("}")
    return "\n".join(lines) + "\n"


def _render_getter(getter: ElementGetter, visibility: str) -> list[str]:
    element_type = _element_type(getter)
    field = _field_name(getter)
    build = "buildList" if isinstance(getter.return_type, ListOfType) else "build"
    factory = "custom" if element_type.is_custom else "element"
    expression = f"{factory}(this.{field}).{build}({element_type.name}.class)"
    return [
        f"{INDENT}{visibility}{getter.declaration} {{",
        f"{INDENT * 2}return {expression};",
        f"{INDENT}}}",
    ]


def render_implementation(ir: PageObjectIR) -> str:
    """Render the implementation class of a page object."""
    imports = {BASE_CLASS, ELEMENT_MARKER, ELEMENT_LOCATION, ir.full_name}
    if ir.root_annotation:
        imports.add(PAGE_MARKER)
    methods = list(ir.methods)
    if ir.before_load is not None:
        methods.append(ir.before_load)
    for method in methods:
        imports |= _method_imports(method, ir.package)
        if any("Collectors." in line for line in method.code_lines):
            imports.add(COLLECTORS)
    getters = [e for e in ir.elements if e.element_name != ROOT_ELEMENT]
    for getter in getters:
        imports |= _type_imports(getter.return_type, ir.package)

    lines = []
    package = f"{ir.package}.{IMPL_PACKAGE}" if ir.package else IMPL_PACKAGE
    lines += [f"package {package};", ""]
    lines += _render_imports(imports)
    lines.append("")
    if ir.root_annotation:
        lines.append(ir.root_annotation.replace("@ElementMarker", "@PageMarker"))
    lines.append(
        f"public final class {ir.impl_name} extends {_simple(BASE_CLASS)} implements {ir.name} {{"
    )

    for getter in getters:
        lines += ["", f"{INDENT}{getter.annotation}", f"{INDENT}private ElementLocation {_field_name(getter)};"]

    for method in ir.methods:
        lines.append("")
        if method.is_public:
            lines.append(f"{INDENT}@Override")
        visibility = "public " if method.is_public else ""
        lines.append(f"{INDENT}{visibility}{method.declaration.code_line} {{")
        lines += _render_body(method, INDENT * 2)
        lines.append(f"{INDENT}}}")

    if ir.before_load is not None:
        lines += ["", f"{INDENT}@Override", f"{INDENT}protected {ir.before_load.declaration.code_line} {{"]
        lines += _render_body(ir.before_load, INDENT * 2)
        lines.append(f"{INDENT}}}")

    if ir.expose_root_element:
        lines += [
            "",
            f"{INDENT}@Override",
            f"{INDENT}public RootElement getRoot() {{",
            f"{INDENT * 2}return this.getRootElement();",
            f"{INDENT}}}",
        ]

    for getter in getters:
        lines.append("")
        if getter.is_public:
            lines.append(f"{INDENT}@Override")
        lines += _render_getter(getter, "public " if getter.is_public else "")

    lines.append("}")
    return "\n".join(lines) + "\n"


def output_paths(ir: PageObjectIR, output_dir: Path) -> tuple[Path, Path]:
    """Interface and implementation file paths for a page object."""
    package_dir = output_dir.joinpath(*ir.package.split(".")) if ir.package else output_dir
    return (
        package_dir / f"{ir.name}.java",
        package_dir / IMPL_PACKAGE / f"{ir.impl_name}.java",
    )


def write_page_object(ir: PageObjectIR, output_dir: Path) -> list[Path]:
    """Write interface and implementation source files.

    Returns:
        Paths written, interface first

    Raises:
        WriterError: If a file or directory cannot be written
    """
    interface_path, impl_path = output_paths(ir, output_dir)
    written = []
    for path, source in (
        (interface_path, render_interface(ir)),
        (impl_path, render_implementation(ir)),
    ):
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source)
        except OSError as e:
            raise WriterError(f"Failed to write {path}: {e}") from e
        logger.debug(f"Wrote {path}")
        written.append(path)
    return written
