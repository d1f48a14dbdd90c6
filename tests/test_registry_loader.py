"""Tests for ``metamodule.runtime.registry`` and ``metamodule.runtime.loader``."""

from __future__ import annotations

import sys

import pytest

from metamodule import (
    AlreadyRegisteredError,
    NotFoundError,
    declare,
    get_registered_modules,
    load_module,
    package_for,
)
from metamodule.runtime.registry import REGISTRY, ModuleRecord


def test_registered_record_is_read_only(pkg):
    declare({"x": 1, "items": [1]}, name="Frozen", package=pkg)
    record = REGISTRY.get(f"{pkg}.Frozen")

    assert isinstance(record, ModuleRecord)
    assert record.package == pkg
    assert record.state["x"] == 1
    with pytest.raises(TypeError):
        record.state["x"] = 2
    with pytest.raises(TypeError):
        record.behaviors["extra"] = len
    with pytest.raises(AttributeError):
        record.name = "other"


def test_registering_twice_keeps_first_constructor(pkg):
    first = declare({"x": 1}, name="Once", package=pkg)

    with pytest.raises(AlreadyRegisteredError, match="already registered"):
        declare({"x": 2}, name="Once", package=pkg)

    assert first().x == 1
    assert get_registered_modules()[f"{pkg}.Once"] is first.record


def test_embed_index_and_lineage(pkg):
    declare({}, name="C", package=pkg)
    declare({}, name="B", package=pkg)
    declare({}, f"{pkg}.C", name="D", package=pkg)
    declare({}, f"{pkg}.B", f"{pkg}.D", name="A", package=pkg)
    record = REGISTRY.get(f"{pkg}.A")

    assert record.embeds == (f"{pkg}.B", f"{pkg}.D")
    assert record.embed_index == {f"{pkg}.B": 0, f"{pkg}.D": 1}
    assert record.lineage == (f"{pkg}.B", f"{pkg}.D", f"{pkg}.C")
    assert record.embeds_module(f"{pkg}.C")
    assert not record.embeds_module(f"{pkg}.A")


def test_lineage_visits_diamonds_once(pkg):
    declare({}, name="Root", package=pkg)
    declare({}, f"{pkg}.Root", name="Left", package=pkg)
    declare({}, f"{pkg}.Root", name="Right", package=pkg)
    declare({}, f"{pkg}.Left", f"{pkg}.Right", name="Bottom", package=pkg)

    assert REGISTRY.get(f"{pkg}.Bottom").lineage == (
        f"{pkg}.Left",
        f"{pkg}.Right",
        f"{pkg}.Root",
    )


def test_tag_lookup_tolerates_unhashable_values():
    assert REGISTRY.name_for_tag([]) is None
    assert REGISTRY.name_for_tag(len) is None


def test_package_for_drops_trailing_module_name():
    assert package_for("fixtures.shapes.Point") == "fixtures.shapes"
    assert package_for("fixtures.counter") == "fixtures.counter"
    assert package_for("Point") is None
    assert package_for("Bad-Package.Point") is None


def test_load_module_returns_registered_record(pkg):
    declare({}, name="Ready", package=pkg)

    assert load_module(f"{pkg}.Ready").name == f"{pkg}.Ready"


def test_load_module_imports_package_on_demand():
    record = load_module("fixtures.shapes.Point")

    assert record.name == "fixtures.shapes.Point"
    assert record.package == "fixtures.shapes"
    assert "fixtures.shapes" in sys.modules


def test_load_module_for_module_named_after_package():
    record = load_module("fixtures.counter")

    assert record.package == "fixtures.counter"
    assert "increment" in record.behaviors


def test_load_module_reports_not_found_after_clean_import():
    with pytest.raises(NotFoundError, match="not found"):
        load_module("fixtures.empty.Nothing")


def test_load_module_rejects_names_without_package_shape():
    with pytest.raises(NotFoundError):
        load_module("NoSuchTopLevelModule")


def test_load_module_propagates_host_import_errors():
    with pytest.raises(RuntimeError, match="broken fixture package"):
        load_module("fixtures.broken.Thing")

    with pytest.raises(ModuleNotFoundError):
        load_module("fixtures.absent.Thing")


def test_concurrent_registration_succeeds_exactly_once(pkg):
    import threading

    outcomes = []
    barrier = threading.Barrier(8)

    def attempt():
        barrier.wait()
        try:
            declare({}, name="Raced", package=pkg)
        except AlreadyRegisteredError:
            outcomes.append("conflict")
        else:
            outcomes.append("registered")

    threads = [threading.Thread(target=attempt) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count("registered") == 1
    assert outcomes.count("conflict") == 7
