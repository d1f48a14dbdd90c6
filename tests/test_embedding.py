"""Tests for ``metamodule.runtime.embedding``."""

from __future__ import annotations

import pytest

from metamodule import EmbedError, ValidationError, declare, get_registered_modules
from metamodule.runtime.classifier import classify
from metamodule.runtime.embedding import embed_modules


def _tag(label):
    def method(self):
        return label

    return method


@pytest.fixture
def bases(pkg):
    declare({"shared": "a", "only_a": 1, "foo": _tag("A.foo"), "__len__": _tag(1)}, name="A", package=pkg)
    declare({"shared": "b", "only_b": [2], "foo": _tag("B.foo"), "__len__": _tag(2)}, name="B", package=pkg)
    return f"{pkg}.A", f"{pkg}.B"


def test_later_embed_wins_and_own_fields_are_kept(bases):
    a, b = bases
    decl = classify("child", {"own": True, "foo": _tag("own.foo")})

    embeds = embed_modules(decl, a, b)

    assert embeds == [a, b]
    assert decl.embeds == [a, b]
    assert decl.state["shared"] == "b"
    assert decl.state["only_a"] == 1
    assert decl.state["only_b"] == [2]
    assert decl.state["own"] is True
    assert decl.behaviors["foo"](None) == "own.foo"
    assert decl.protocol["__len__"](None) == 2


def test_reversing_embed_order_flips_precedence(bases):
    a, b = bases
    decl = classify("child", {})

    embed_modules(decl, b, a)

    assert decl.state["shared"] == "a"
    assert decl.behaviors["foo"](None) == "A.foo"
    assert decl.protocol["__len__"](None) == 1


def test_identity_fields_are_not_inherited(bases):
    a, _ = bases
    decl = classify("child", {})

    embed_modules(decl, a)

    assert "_NAME" not in decl.state
    assert "_PACKAGE" not in decl.state


def test_embedded_state_is_copied_fresh(bases):
    _, b = bases
    decl = classify("child", {})

    embed_modules(decl, b)
    decl.state["only_b"].append(3)

    assert get_registered_modules()[b].state["only_b"] == [2]


def test_duplicate_embed_is_rejected(bases):
    a, _ = bases

    with pytest.raises(ValidationError, match="twice"):
        embed_modules(classify("child", {}), a, a)


def test_unknown_embed_names_the_missing_module(pkg):
    with pytest.raises(EmbedError, match=f"{pkg}.Missing"):
        embed_modules(classify("child", {}), f"{pkg}.Missing")


def test_embed_names_must_be_strings():
    with pytest.raises(ValidationError):
        embed_modules(classify("child", {}), 42)
