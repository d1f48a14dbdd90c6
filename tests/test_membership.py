"""Tests for ``metamodule.runtime.membership``."""

from __future__ import annotations

from types import SimpleNamespace

from metamodule import declare, instanceof, module_name_of


def test_instanceof_covers_transitive_embeds(pkg):
    declare({}, name="C", package=pkg)
    declare({}, f"{pkg}.C", name="B", package=pkg)
    A = declare({}, f"{pkg}.B", name="A", package=pkg)
    declare({}, name="Unrelated", package=pkg)

    a = A()

    assert instanceof(a, f"{pkg}.A")
    assert instanceof(a, f"{pkg}.B")
    assert instanceof(a, f"{pkg}.C")
    assert not instanceof(a, f"{pkg}.Unrelated")
    assert not instanceof(a, "never.Registered")


def test_instanceof_does_not_look_upwards(pkg):
    B = declare({}, name="B", package=pkg)
    declare({}, f"{pkg}.B", name="A", package=pkg)

    assert not instanceof(B(), f"{pkg}.A")


def test_instanceof_never_fails_for_foreign_values(pkg):
    declare({}, name="Known", package=pkg)
    impostor = SimpleNamespace(instanceof=lambda: f"{pkg}.Known")

    for value in (None, 1, "text", {"instanceof": len}, impostor, object()):
        assert not instanceof(value, f"{pkg}.Known")


def test_instanceof_rejects_non_string_names(pkg):
    Known = declare({}, name="Known", package=pkg)

    assert not instanceof(Known(), None)
    assert not instanceof(Known(), 42)


def test_module_name_of(pkg):
    Known = declare({}, name="Known", package=pkg)

    assert module_name_of(Known()) == f"{pkg}.Known"
    assert module_name_of(object()) is None


def test_instances_built_by_init_result_are_checked_by_their_own_module(pkg):
    Inner = declare({}, name="Inner", package=pkg)
    Outer = declare({"init": lambda self: Inner()}, name="Outer", package=pkg)

    built = Outer()

    assert instanceof(built, f"{pkg}.Inner")
    assert not instanceof(built, f"{pkg}.Outer")
