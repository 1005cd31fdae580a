"""Tests for member ordering and service method grouping."""

import itertools

from java_apiview.analyser.ordering import (
    NON_SERVICE_METHODS_GROUP,
    SERVICE_METHODS_GROUP,
    callable_sort_key,
    comparable_name,
    group_methods,
    sort_callables,
)
from java_apiview.settings import Settings
from java_apiview.syntax.nodes import (
    Annotation,
    ClassType,
    ConstructorDeclaration,
    DeclarationKind,
    MethodDeclaration,
    Parameter,
    PrimitiveType,
    TypeDeclaration,
)


def _method(name: str, parameter_count: int = 0, annotations: tuple[str, ...] = ()) -> MethodDeclaration:
    return MethodDeclaration(
        name=name,
        return_type=PrimitiveType("void"),
        parameters=tuple(Parameter(type=ClassType("String"), name=f"p{i}") for i in range(parameter_count)),
        annotations=tuple(Annotation(name=a, text=f"@{a}") for a in annotations),
    )


def _constructor(parameter_count: int) -> ConstructorDeclaration:
    return ConstructorDeclaration(
        name="C",
        parameters=tuple(Parameter(type=ClassType("String"), name=f"p{i}") for i in range(parameter_count)),
    )


def test_comparable_name_strips_accessor_prefixes():
    assert comparable_name("getName") == "name"
    assert comparable_name("setName") == "name"
    assert comparable_name("isReady") == "ready"
    assert comparable_name("acquire") == "acquire"
    assert comparable_name("buildClient") == "buildclient"


def test_accessors_and_build_methods_order():
    methods = [_method(name) for name in ("getName", "setName", "buildA", "isReady", "acquire")]
    assert [m.name for m in sort_callables(methods)] == ["acquire", "isReady", "getName", "setName", "buildA"]


def test_build_methods_sort_last_alphabetically():
    methods = [_method(name) for name in ("buildZ", "zap", "buildAsyncClient", "getBuildInfo")]
    assert [m.name for m in sort_callables(methods)] == ["zap", "buildAsyncClient", "getBuildInfo", "buildZ"]


def test_constructors_precede_methods_by_parameter_count():
    callables = [_method("alpha"), _constructor(2), _constructor(0), _method("beta")]
    ordered = sort_callables(callables)
    assert [type(c).__name__ for c in ordered[:2]] == ["ConstructorDeclaration", "ConstructorDeclaration"]
    assert [len(c.parameters) for c in ordered[:2]] == [0, 2]


def test_overloads_sort_by_parameter_count():
    methods = [_method("upload", 3), _method("upload", 1), _method("upload", 2)]
    assert [len(m.parameters) for m in sort_callables(methods)] == [1, 2, 3]


def test_sort_key_is_a_total_order():
    callables = [
        _constructor(0),
        _constructor(1),
        _method("getName"),
        _method("name"),
        _method("Name"),
        _method("isName"),
        _method("buildA"),
        _method("buildA", 1),
        _method("build"),
    ]
    keys = [callable_sort_key(c) for c in callables]
    for a, b in itertools.product(keys, repeat=2):
        assert (a < b) + (a > b) + (a == b) == 1
    for a, b, c in itertools.product(keys, repeat=3):
        if a <= b and b <= c:
            assert a <= c


def test_methods_are_not_grouped_without_service_client():
    owner = TypeDeclaration(kind=DeclarationKind.CLASS, name="Plain")
    groups = group_methods(owner, [_method("foo"), _method("bar", annotations=("ServiceMethod",))], Settings())
    assert [(name, [m.name for m in ms]) for name, ms in groups] == [(None, ["bar", "foo"])]


def test_service_client_groups_service_methods_first():
    owner = TypeDeclaration(
        kind=DeclarationKind.CLASS,
        name="BlobClient",
        annotations=(Annotation(name="ServiceClient", text="@ServiceClient"),),
    )
    methods = [_method("foo"), _method("bar", annotations=("ServiceMethod",)), _method("baz")]

    groups = group_methods(owner, methods, Settings())

    assert [(name, [m.name for m in ms]) for name, ms in groups] == [
        (SERVICE_METHODS_GROUP, ["bar"]),
        (NON_SERVICE_METHODS_GROUP, ["baz", "foo"]),
    ]


def test_empty_groups_are_skipped():
    owner = TypeDeclaration(
        kind=DeclarationKind.CLASS,
        name="BlobClient",
        annotations=(Annotation(name="com.azure.core.annotation.ServiceClient", text="@ServiceClient"),),
    )
    groups = group_methods(owner, [_method("foo")], Settings())
    assert [name for name, _ in groups] == [NON_SERVICE_METHODS_GROUP]
