"""Member ordering for the listing.

Constructors come first, ordered by parameter count. Methods are compared on
their name with a leading `get`/`set`/`is` stripped and lowercased, with the
`build*` methods pushed to the end; ties fall back to the full name and then
to the parameter count.
"""

from java_apiview.settings import Settings
from java_apiview.syntax.nodes import (
    CallableDeclaration,
    ConstructorDeclaration,
    MethodDeclaration,
    TypeDeclaration,
    find_annotation,
)

SERVICE_METHODS_GROUP = "Service Methods"
NON_SERVICE_METHODS_GROUP = "Non-Service Methods"


def comparable_name(name: str) -> str:
    """Method name without its accessor prefix, lowercased."""
    if name.startswith(("set", "get")):
        name = name[3:]
    elif name.startswith("is"):
        name = name[2:]
    return name.lower()


def callable_sort_key(declaration: CallableDeclaration) -> tuple:
    parameter_count = len(declaration.parameters)
    if isinstance(declaration, ConstructorDeclaration):
        return (0, False, "", "", parameter_count)
    stripped = comparable_name(declaration.name)
    return (1, stripped.startswith("build"), stripped, declaration.name, parameter_count)


def sort_callables(declarations: list[CallableDeclaration]) -> list[CallableDeclaration]:
    return sorted(declarations, key=callable_sort_key)


def group_methods(
    owner: TypeDeclaration,
    methods: list[MethodDeclaration],
    settings: Settings,
) -> list[tuple[str | None, list[MethodDeclaration]]]:
    """Split sorted methods into named groups.

    Only a type carrying the service client annotation is split, into its
    service methods followed by everything else; empty groups are left out.
    Any other type yields one unnamed group.
    """
    ordered = sort_callables(methods)
    if find_annotation(owner.annotations, settings.service_client_annotation) is None:
        return [(None, ordered)]

    service: list[MethodDeclaration] = []
    non_service: list[MethodDeclaration] = []
    for method in ordered:
        if find_annotation(method.annotations, settings.service_method_annotation) is not None:
            service.append(method)
        else:
            non_service.append(method)
    groups = [(SERVICE_METHODS_GROUP, service), (NON_SERVICE_METHODS_GROUP, non_service)]
    return [(name, group) for name, group in groups if group]
