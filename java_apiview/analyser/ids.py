"""Definition ids: stable, URL-safe anchors derived from fully-qualified paths."""

from urllib.parse import quote

from java_apiview.syntax.nodes import CallableDeclaration, Parameter

MODULE_INFO_ID = "module-info"

# Characters Java paths use that are safe to keep in a fragment identifier.
_SAFE_CHARACTERS = "._-~(),$"


def make_id(path: str) -> str:
    """Strip spaces and percent-encode anything outside the safe set."""
    return quote(path.replace(" ", ""), safe=_SAFE_CHARACTERS)


def qualify(scope: str, name: str) -> str:
    """Join a package or enclosing type name with a simple name."""
    return f"{scope}.{name}" if scope else name


def parameter_signature(parameter: Parameter) -> str:
    text = str(parameter.type)
    return text + "..." if parameter.varargs else text


def callable_path(owner: str, declaration: CallableDeclaration) -> str:
    """`owner.name(Type1,Type2)`: the parameter types keep overloads apart."""
    signature = ",".join(parameter_signature(parameter) for parameter in declaration.parameters)
    return f"{owner}.{declaration.name}({signature})"


def module_directive_id(name: str) -> str:
    return make_id(f"{MODULE_INFO_ID}-{name}")
