"""Tests for project editing and persistence."""

import copy
import json
import pickle

import pytest

from core.exceptions import ProjectImportError, ValidationError
from core.project import (
    apply_boundary,
    change_triangle_method,
    dump_project,
    load_project,
    new_project,
    new_triangle,
    next_triangle_id,
    project_results,
    project_summary,
    remove_triangle,
    replace_triangle,
    update_triangle_input,
)
from core.schema import CalculationMethod, ProjectData, TriangleSpec
from core.settings import Settings
from core.units import Unit


SAMPLE_PROJECT = {
    "projectDetails": {"name": "North field", "notes": "Measured by tape"},
    "unit": "ft",
    "triangles": [
        {"id": 1717000000000, "method": "SSS", "inputs": {"a": "3.10", "b": "04", "c": "5.000"}},
        {"id": 1717000000001, "method": "SAS", "inputs": {"sideA": "3", "sideB": "4", "angleC": "90"}},
        {"id": 1717000000002, "method": "BaseHeight", "inputs": {"base": "", "height": None}},
        {"id": 1717000000003, "method": "Coordinates", "inputs": {}},
    ],
    "imageDataUrl": None,
    "boundaryPoints": [{"x": 10.5, "y": 20.25}, {"x": 110.0, "y": 20.0}, {"x": 60.0, "y": 95.0}],
    "scale": {"pixelLength": 100.0, "realLength": 30.0, "unit": "ft"},
}


def test_round_trip_is_lossless():
    """Dumped JSON equals the imported JSON, numeric strings untouched."""
    project = load_project(json.dumps(SAMPLE_PROJECT))
    assert json.loads(dump_project(project)) == SAMPLE_PROJECT
    assert project.triangles[0].inputs == {"a": "3.10", "b": "04", "c": "5.000"}


def test_load_from_mapping():
    project = load_project(SAMPLE_PROJECT)
    assert project.unit is Unit.FEET
    assert project.project_details.name == "North field"
    assert project.scale.conversion_factor == pytest.approx(0.3)


def test_load_older_export_without_boundary():
    payload = copy.deepcopy(SAMPLE_PROJECT)
    del payload["boundaryPoints"]
    del payload["scale"]
    project = load_project(payload)
    assert project.boundary_points == []
    assert project.scale is None


@pytest.mark.parametrize(
    "mutate",
    [
        lambda p: p.update(unit="yd"),
        lambda p: p["triangles"][0].update(method="SSA"),
        lambda p: p["triangles"][0]["inputs"].update(sideA="3"),
        lambda p: p["triangles"][1]["inputs"].update(sideA=3),
        lambda p: p["triangles"][1].update(id=1717000000000),
        lambda p: p.update(boundaryPoints=[{"x": "left"}]),
    ],
)
def test_malformed_projects_are_rejected(mutate):
    payload = copy.deepcopy(SAMPLE_PROJECT)
    mutate(payload)
    with pytest.raises(ProjectImportError) as excinfo:
        load_project(payload)
    assert excinfo.value.details["errors"]


def test_invalid_json_is_rejected():
    with pytest.raises(ProjectImportError):
        load_project("{not json")


def test_non_object_is_rejected():
    with pytest.raises(ProjectImportError):
        load_project("[1, 2, 3]")


def test_new_triangle():
    triangle = new_triangle(5)
    assert triangle.method is CalculationMethod.SSS
    assert triangle.inputs == {"a": "", "b": "", "c": ""}


def test_update_input_returns_new_spec():
    original = new_triangle(1)
    updated = update_triangle_input(original, "a", "3.5")
    assert updated.inputs["a"] == "3.5"
    assert original.inputs["a"] == ""
    assert updated.id == original.id


def test_update_rejects_foreign_field():
    with pytest.raises(ValidationError):
        update_triangle_input(new_triangle(1), "base", "3")


def test_change_method_resets_inputs():
    spec = update_triangle_input(new_triangle(1), "a", "3")
    changed = change_triangle_method(spec, CalculationMethod.BASE_HEIGHT)
    assert changed.method is CalculationMethod.BASE_HEIGHT
    assert changed.inputs == {}
    assert spec.method is CalculationMethod.SSS


def test_list_edits():
    specs = [new_triangle(1), new_triangle(2), new_triangle(3)]
    assert next_triangle_id(specs) == 4
    assert next_triangle_id([]) == 1
    assert [s.id for s in remove_triangle(specs, 2)] == [1, 3]
    edited = replace_triangle(specs, update_triangle_input(specs[1], "c", "9"))
    assert edited[1].inputs["c"] == "9"
    assert edited[0] is specs[0]


def test_project_results_use_project_unit():
    project = load_project(SAMPLE_PROJECT)
    results = project_results(project)
    assert [r.is_valid for r in results] == [True, True, False, False]
    assert results[1].area == pytest.approx(6.0)
    assert results[1].area_in_meters == pytest.approx(6.0 * 0.3048 ** 2)

    summary = project_summary(project)
    assert summary.valid_count == 2
    assert not summary.all_valid


def test_apply_boundary_replaces_triangles_and_unit():
    project = ProjectData(
        unit=Unit.FEET,
        triangles=[TriangleSpec(id=8, method=CalculationMethod.SSS, inputs={})],
        boundary_points=[{"x": 0, "y": 0}, {"x": 300, "y": 0}, {"x": 0, "y": 400}],
        scale={"pixelLength": 100.0, "realLength": 1.0, "unit": "m"},
    )
    finalized = apply_boundary(project)
    assert finalized.unit is Unit.METERS
    assert [t.id for t in finalized.triangles] == [9]
    assert finalized.triangles[0].inputs == {"a": "5.00", "b": "4.00", "c": "3.00"}
    assert project.unit is Unit.FEET


def test_new_project_uses_configured_unit(tmp_path):
    path = tmp_path / "metric.yaml"
    path.write_text("calculation:\n  default_unit: m\n", encoding="utf-8")

    project = new_project("South lot", settings=Settings.load(path))

    assert project.unit is Unit.METERS
    assert project.project_details.name == "South lot"
    assert project.triangles == []
    assert project.scale is None


def test_new_project_defaults_to_feet():
    assert new_project().unit is Unit.FEET


@pytest.mark.parametrize(
    "mutate",
    [
        lambda inputs: inputs.__setitem__("a", "9"),
        lambda inputs: inputs.pop("a"),
        lambda inputs: inputs.update(b="9"),
        lambda inputs: inputs.clear(),
    ],
)
def test_triangle_inputs_are_read_only(mutate):
    spec = TriangleSpec(id=1, method=CalculationMethod.SSS, inputs={"a": "3", "b": "4", "c": "5"})
    with pytest.raises(TypeError):
        mutate(spec.inputs)
    assert spec.inputs == {"a": "3", "b": "4", "c": "5"}


def test_edited_and_loaded_inputs_stay_read_only():
    edited = update_triangle_input(new_triangle(1), "a", "3")
    switched = change_triangle_method(edited, CalculationMethod.SAS)
    loaded = load_project(SAMPLE_PROJECT).triangles[0]
    for spec in (edited, switched, loaded, TriangleSpec(id=2)):
        with pytest.raises(TypeError):
            spec.inputs["a"] = "1"


def test_read_only_inputs_copy_and_pickle():
    spec = update_triangle_input(new_triangle(1), "a", "3")
    for inputs in (copy.deepcopy(spec.inputs), pickle.loads(pickle.dumps(spec.inputs))):
        assert inputs == spec.inputs
        with pytest.raises(TypeError):
            inputs["b"] = "4"
    assert spec.model_dump(mode="json")["inputs"] == {"a": "3", "b": "", "c": ""}
