"""Tests for definition id construction."""

from java_apiview.analyser.ids import callable_path, make_id, module_directive_id, qualify
from java_apiview.syntax.nodes import (
    ArrayType,
    ClassType,
    ConstructorDeclaration,
    MethodDeclaration,
    Parameter,
    PrimitiveType,
)


def test_make_id_keeps_java_path_characters():
    assert make_id("com.example.Client.get(String,int)") == "com.example.Client.get(String,int)"
    assert make_id("com.example.Outer$Inner") == "com.example.Outer$Inner"


def test_make_id_strips_spaces_and_encodes_generics():
    assert make_id("a.B.put(Map<String, Integer>)") == "a.B.put(Map%3CString,Integer%3E)"


def test_make_id_is_deterministic():
    assert make_id("a.B.c(int[])") == make_id("a.B.c(int[])")


def test_qualify_handles_root_package():
    assert qualify("", "Top") == "Top"
    assert qualify("a.b", "Top") == "a.b.Top"


def test_callable_path_includes_parameter_types():
    method = MethodDeclaration(
        name="upload",
        return_type=PrimitiveType("void"),
        parameters=(
            Parameter(type=ArrayType(PrimitiveType("byte")), name="data"),
            Parameter(type=ClassType("String"), name="tags", varargs=True),
        ),
    )
    assert callable_path("a.Blob", method) == "a.Blob.upload(byte[],String...)"


def test_overloads_get_distinct_paths():
    no_args = ConstructorDeclaration(name="Blob")
    one_arg = ConstructorDeclaration(name="Blob", parameters=(Parameter(type=ClassType("String"), name="url"),))
    assert callable_path("a.Blob", no_args) == "a.Blob.Blob()"
    assert callable_path("a.Blob", one_arg) == "a.Blob.Blob(String)"


def test_module_directive_id():
    assert module_directive_id("com.example.core") == "module-info-com.example.core"
