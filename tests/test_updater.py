"""Tests for the SPEC parameter batch updater.

Covers: per-field updates (system, size, quantity), element collection,
run statistics, per-element error isolation and the run report.
"""

from __future__ import annotations

import json

import pytest

from specparams import config
from specparams.parameters import (
    MemoryDocument,
    MemoryElement,
    MemoryParameter,
    ParameterCache,
    StorageKind,
    UpdateOutcome,
)
from specparams.settings import UpdaterSettings
from specparams.updater import (
    SpecUpdater,
    UpdateReport,
    UpdateStats,
    collect_elements,
    compute_quantity,
    find_size_parameter,
    get_system_value,
    update_quantity,
    update_size,
    update_system,
)

TEXT = StorageKind.TEXT
NUMBER = StorageKind.NUMBER
INTEGER = StorageKind.INTEGER


class BrokenElement(MemoryElement):
    """Element whose instance parameter lookup raises."""

    def lookup_parameter(self, name: str) -> MemoryParameter | None:
        raise RuntimeError("boom")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _pipe(element_id: str = "pipe-1") -> MemoryElement:
    return MemoryElement(
        element_id,
        category_key="OST_PipeCurves",
        category_name="Pipes",
        type_id="copper",
        parameters=[
            MemoryParameter("SPEC_SYSTEM", TEXT, ""),
            MemoryParameter("SPEC_SIZE", TEXT, ""),
            MemoryParameter("SPEC_QUANTITY", NUMBER, 0.0),
        ],
        builtins={
            config.BUILTIN_CALCULATED_SIZE: MemoryParameter("Size", TEXT, "19.05 mm"),
            config.BUILTIN_CURVE_LENGTH: MemoryParameter("Length", NUMBER, 10.0),
            config.BUILTIN_SYSTEM_NAME: MemoryParameter("System Name", TEXT, "Domestic Cold Water 1"),
        },
    )


def _duct(element_id: str = "duct-1") -> MemoryElement:
    return MemoryElement(
        element_id,
        category_key="OST_DuctCurves",
        category_name="Ducts",
        parameters=[
            MemoryParameter("SPEC_SIZE", TEXT, ""),
            MemoryParameter("SPEC_QUANTITY", INTEGER, 0),
            MemoryParameter("Size", TEXT, "100x200"),
            MemoryParameter("Length", NUMBER, 2.0),
        ],
    )


def _light(element_id: str = "light-1") -> MemoryElement:
    return MemoryElement(
        element_id,
        category_key="OST_LightingFixtures",
        category_name="Lighting Fixtures",
        parameters=[
            MemoryParameter("SPEC_SYSTEM", TEXT, ""),
            MemoryParameter("SPEC_SIZE", TEXT, ""),
            MemoryParameter("Size", TEXT, "600x600"),
        ],
        builtins={
            config.BUILTIN_SYSTEM_CLASSIFICATION: MemoryParameter("Classification", TEXT, "Power"),
        },
    )


@pytest.fixture
def document() -> MemoryDocument:
    doc = MemoryDocument("Test Model")
    doc.add_type("copper", [MemoryParameter(config.SYSTEM_ABBREVIATION, TEXT, "DCW")])
    doc.add_element(_pipe())
    doc.add_element(_duct())
    doc.add_element(_light())
    return doc


@pytest.fixture
def cache(document: MemoryDocument) -> ParameterCache:
    return ParameterCache(document)


@pytest.fixture
def updater(document: MemoryDocument) -> SpecUpdater:
    return SpecUpdater(document, UpdaterSettings(log_level="WARNING"))


def _value(document: MemoryDocument, element_id: str, name: str) -> object:
    element = document.get_element(element_id)
    assert element is not None
    param = element.lookup_parameter(name)
    assert param is not None
    return param.value


# ---------------------------------------------------------------------------
# Field updates
# ---------------------------------------------------------------------------


class TestSystemField:
    def test_abbreviation_from_type(self, document: MemoryDocument, cache: ParameterCache) -> None:
        pipe = document.get_element("pipe-1")
        assert get_system_value(pipe, cache) == "DCW"
        assert update_system(pipe, cache) is UpdateOutcome.UPDATED
        assert _value(document, "pipe-1", "SPEC_SYSTEM") == "DCW"

    def test_system_name_fallback(self, cache: ParameterCache) -> None:
        pipe = _pipe()
        pipe._type_id = None
        assert get_system_value(pipe, cache) == "Domestic Cold Water 1"

    def test_classification_fallback(self, document: MemoryDocument, cache: ParameterCache) -> None:
        assert get_system_value(document.get_element("light-1"), cache) == "Power"

    def test_no_source(self, document: MemoryDocument, cache: ParameterCache) -> None:
        assert get_system_value(document.get_element("duct-1"), cache) is None

    def test_no_target_skipped(self, document: MemoryDocument, cache: ParameterCache) -> None:
        assert update_system(document.get_element("duct-1"), cache) is None

    def test_read_only_target_skipped(self, cache: ParameterCache) -> None:
        pipe = _pipe()
        pipe.lookup_parameter("SPEC_SYSTEM").read_only = True
        assert update_system(pipe, cache) is None


class TestSizeField:
    def test_pipe_uses_calculated_size(self, document: MemoryDocument, cache: ParameterCache) -> None:
        pipe = document.get_element("pipe-1")
        source = find_size_parameter(pipe, cache)
        assert source is not None and source.value == "19.05 mm"
        assert update_size(pipe, cache) is UpdateOutcome.UPDATED
        assert _value(document, "pipe-1", "SPEC_SIZE") == '3/4"'

    def test_duct_uses_named_parameter(self, document: MemoryDocument, cache: ParameterCache) -> None:
        assert update_size(document.get_element("duct-1"), cache) is UpdateOutcome.UPDATED
        assert _value(document, "duct-1", "SPEC_SIZE") == "DN200x100"

    def test_size_from_type(self) -> None:
        doc = MemoryDocument()
        doc.add_type("tray", [MemoryParameter("Tray Width", NUMBER, 300.0)])
        tray = MemoryElement(
            "tray-1",
            category_key="OST_CableTray",
            category_name="Cable Trays",
            type_id="tray",
            parameters=[MemoryParameter("SPEC_SIZE", TEXT, "")],
        )
        local = ParameterCache(doc)
        assert update_size(tray, local) is UpdateOutcome.UPDATED
        assert tray.lookup_parameter("SPEC_SIZE").value == "DN300"

    def test_category_not_sized(self, document: MemoryDocument, cache: ParameterCache) -> None:
        assert update_size(document.get_element("light-1"), cache) is None

    def test_empty_source_skipped(self, cache: ParameterCache) -> None:
        duct = _duct()
        duct.lookup_parameter("Size")._value = None
        duct.lookup_parameter("Length")._value = None
        assert find_size_parameter(duct, cache) is None
        assert update_size(duct, cache) is None


class TestQuantityField:
    def test_feet_to_meters(self) -> None:
        assert compute_quantity(10.0) == pytest.approx(3.05)

    def test_short_runs_count_as_one(self) -> None:
        assert compute_quantity(2.0) == 1.0
        assert compute_quantity(0.0) == 1.0

    def test_custom_scale(self) -> None:
        assert compute_quantity(1500.0, to_meters=0.001) == pytest.approx(1.5)

    def test_pipe_quantity(self, document: MemoryDocument, cache: ParameterCache) -> None:
        assert update_quantity(document.get_element("pipe-1"), cache) is UpdateOutcome.UPDATED
        assert _value(document, "pipe-1", "SPEC_QUANTITY") == pytest.approx(3.05)

    def test_integer_quantity(self, document: MemoryDocument, cache: ParameterCache) -> None:
        assert update_quantity(document.get_element("duct-1"), cache) is UpdateOutcome.UPDATED
        assert _value(document, "duct-1", "SPEC_QUANTITY") == 1


# ---------------------------------------------------------------------------
# Element collection
# ---------------------------------------------------------------------------


class TestCollectElements:
    def test_by_category(self, document: MemoryDocument) -> None:
        ids = [e.element_id for e in collect_elements(document)]
        assert ids == ["pipe-1", "duct-1", "light-1"]

    def test_categories_restrict(self, document: MemoryDocument) -> None:
        ids = [e.element_id for e in collect_elements(document, categories=["OST_DuctCurves"])]
        assert ids == ["duct-1"]

    def test_selection(self, document: MemoryDocument) -> None:
        elements = collect_elements(document, selection=["duct-1", "missing", "duct-1", "pipe-1"])
        assert [e.element_id for e in elements] == ["duct-1", "pipe-1"]

    def test_duplicate_categories(self, document: MemoryDocument) -> None:
        elements = collect_elements(document, categories=["OST_PipeCurves", "OST_PipeCurves"])
        assert len(elements) == 1


# ---------------------------------------------------------------------------
# SpecUpdater
# ---------------------------------------------------------------------------


class TestSpecUpdater:
    def test_full_run(self, updater: SpecUpdater, document: MemoryDocument) -> None:
        report = updater.run()
        stats = report.stats
        assert stats.elements_processed == 3
        assert stats.system_updates == 2
        assert stats.size_updates == 2
        assert stats.quantity_updates == 2
        assert stats.total_updates == 6
        assert stats.errors == []
        assert stats.warnings == []
        assert _value(document, "light-1", "SPEC_SYSTEM") == "Power"
        assert _value(document, "light-1", "SPEC_SIZE") == ""

    def test_second_run_is_idempotent(self, updater: SpecUpdater) -> None:
        updater.run()
        stats = updater.run().stats
        assert stats.total_updates == 0
        assert stats.unchanged == 6
        assert stats.failed_writes == 0

    def test_selection_mode(self, updater: SpecUpdater) -> None:
        report = updater.run(selection=["duct-1"])
        assert report.used_selection is True
        assert report.stats.elements_processed == 1
        assert report.stats.size_updates == 1

    def test_empty_selection_means_all(self, updater: SpecUpdater) -> None:
        report = updater.run(selection=[])
        assert report.used_selection is False
        assert report.stats.elements_processed == 3

    def test_errors_isolated_per_element(self, document: MemoryDocument) -> None:
        document.add_element(
            BrokenElement("broken-1", category_key="OST_DuctCurves", category_name="Ducts")
        )
        stats = SpecUpdater(document).run().stats
        assert stats.elements_processed == 4
        assert len(stats.errors) == 1
        assert "SPEC_SIZE failed for broken-1: boom" in stats.errors[0]
        assert stats.total_updates == 6

    def test_failed_write_counted(self, document: MemoryDocument) -> None:
        document.get_element("duct-1").lookup_parameter("SPEC_SIZE").locked = True
        stats = SpecUpdater(document).run().stats
        assert stats.failed_writes == 1
        assert stats.size_updates == 1

    def test_shared_type_target(self) -> None:
        doc = MemoryDocument()
        type_size = MemoryParameter("SPEC_SIZE", TEXT, "")
        doc.add_type("rect", [type_size])
        for i in range(3):
            doc.add_element(
                MemoryElement(
                    f"d{i}",
                    category_key="OST_DuctCurves",
                    category_name="Ducts",
                    type_id="rect",
                    parameters=[MemoryParameter("Width", NUMBER, 400.0)],
                )
            )
        stats = SpecUpdater(doc).run().stats
        assert type_size.value == "DN400"
        assert stats.size_updates == 1
        assert stats.unchanged == 2

    def test_settings_applied(self, document: MemoryDocument) -> None:
        settings = UpdaterSettings(length_to_meters=1.0, log_level="WARNING")
        SpecUpdater(document, settings).run(selection=["pipe-1"])
        assert _value(document, "pipe-1", "SPEC_QUANTITY") == pytest.approx(10.0)

    def test_document_length_scale(self) -> None:
        doc = MemoryDocument("Metric", length_to_meters=0.001)
        duct = doc.add_element(_duct())
        duct.lookup_parameter("Length").set(3400.0)
        SpecUpdater(doc).run()
        assert duct.lookup_parameter("SPEC_QUANTITY").value == 3

    def test_settings_scale_overrides_document(self) -> None:
        doc = MemoryDocument("Metric", length_to_meters=0.001)
        doc.add_element(_duct())
        updater = SpecUpdater(doc, UpdaterSettings(length_to_meters=1.0))
        assert updater.length_to_meters == 1.0
        updater.run()
        assert _value(doc, "duct-1", "SPEC_QUANTITY") == 2

    def test_missing_targets_warned(self, document: MemoryDocument) -> None:
        document.add_element(
            MemoryElement(
                "duct-9",
                category_key="OST_DuctCurves",
                category_name="Ducts",
                parameters=[MemoryParameter("Size", TEXT, "300x200")],
            )
        )
        report = SpecUpdater(document).run()
        assert report.stats.warnings == ["duct-9: missing SPEC_SIZE, SPEC_QUANTITY"]
        assert "WARNINGS:" in report.to_text()
        assert "## Warnings" in report.to_markdown()

    def test_update_elements_uses_given_cache(self, document: MemoryDocument) -> None:
        cache = ParameterCache(document)
        SpecUpdater(document).update_elements(document.elements(), cache)
        assert cache.is_indexed("copper")

    def test_custom_size_categories(self, document: MemoryDocument) -> None:
        updater = SpecUpdater(document, size_categories={"OST_LightingFixtures"})
        stats = updater.run().stats
        assert _value(document, "light-1", "SPEC_SIZE") == "DN600x600"
        assert stats.size_updates == 1


# ---------------------------------------------------------------------------
# Stats and report
# ---------------------------------------------------------------------------


class TestUpdateStats:
    def test_record(self) -> None:
        stats = UpdateStats()
        assert stats.record("size", UpdateOutcome.UPDATED) is True
        assert stats.record("size", UpdateOutcome.UNCHANGED) is False
        assert stats.record("quantity", UpdateOutcome.FAILED) is False
        assert stats.size_updates == 1
        assert stats.unchanged == 1
        assert stats.failed_writes == 1
        assert stats.total_updates == 1

    def test_add_error_format(self) -> None:
        stats = UpdateStats()
        stats.add_error("SPEC_SIZE", 42, "locked")
        assert stats.errors[0].startswith("[")
        assert stats.errors[0].endswith("] SPEC_SIZE failed for 42: locked")


class TestUpdateReport:
    def test_text_summary(self, updater: SpecUpdater) -> None:
        text = updater.run().to_text()
        assert "SPEC PARAMETERS UPDATE" in text
        assert "Document: Test Model" in text
        assert "Mode: ALL" in text
        assert "SPEC_SIZE: 2" in text
        assert "Total Updates: 6" in text

    def test_errors_truncated(self) -> None:
        stats = UpdateStats(errors=[f"err {i}" for i in range(60)])
        text = UpdateReport(stats).to_text()
        assert "err 49" in text
        assert "err 50" not in text
        assert "... and 10 more" in text

    def test_markdown(self, updater: SpecUpdater) -> None:
        md = updater.run(selection=["pipe-1"]).to_markdown()
        assert md.startswith("# SPEC Parameters Update: Test Model")
        assert "**Mode:** SELECTION" in md
        assert "| SPEC_SIZE | 1 |" in md

    def test_json_round_trip(self, updater: SpecUpdater) -> None:
        report = updater.run()
        data = json.loads(report.to_json())
        assert data["total_updates"] == 6
        assert data["stats"]["size_updates"] == 2
        assert data["mode"] == "ALL"

    def test_finished_at_from_string(self) -> None:
        report = UpdateReport(UpdateStats(), finished_at="2026-01-02T03:04:05+00:00")
        assert report.finished_at.year == 2026
