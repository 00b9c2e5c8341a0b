"""
Tests for annotation translation
"""

import ast

import pytest
from contracheck.translators.annotations import AnnotationTranslator


def translate(annotation: str):
    translator = AnnotationTranslator()
    return translator.translate(ast.parse(annotation, mode="eval").body)


def test_missing_annotation_is_unknown():
    assert AnnotationTranslator().translate(None).unknown


@pytest.mark.parametrize("annotation", ["Any", "typing.Any", "object", "'Any'"])
def test_unknown_types(annotation):
    assert translate(annotation).unknown


@pytest.mark.parametrize("annotation", ["int", "float", "complex", "bool", "builtins.int"])
def test_primitive_types(annotation):
    info = translate(annotation)
    assert info.primitive
    assert not info.optional


def test_bool_is_primitive_boolean():
    info = translate("bool")
    assert info.boolean and info.primitive


@pytest.mark.parametrize("annotation", [
    "Optional[bool]", "typing.Optional[bool]", "Union[bool, None]", "bool | None", "None | bool",
])
def test_boxed_boolean(annotation):
    """Optional bool can hold None and is still a boolean"""
    info = translate(annotation)
    assert info.boolean
    assert info.optional
    assert not info.primitive
    assert info.base == "bool"


@pytest.mark.parametrize("annotation", ["Optional[str]", "str | None", "'Optional[Node]'", "Optional['Node']"])
def test_optional_reference(annotation):
    info = translate(annotation)
    assert info.optional
    assert not info.primitive and not info.boolean


def test_reference_types():
    """Other annotations are non-optional references"""
    for annotation in ["str", "List[int]", "list[str]", "'Node'", "Union[int, str]"]:
        info = translate(annotation)
        assert not info.optional and not info.primitive and not info.unknown, annotation


def test_none_is_void():
    assert translate("None").void


def test_annotated_unwraps():
    info = translate("Annotated[Optional[str], 'doc']")
    assert info.optional
    assert info.base == "str"


def test_text_is_kept_for_messages():
    assert str(translate("Optional[List[int]]")) == "Optional[List[int]]"
    assert translate("Optional[List[int]]").base == "List[int]"
