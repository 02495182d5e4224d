"""Tests for the recorded transform reader."""

import numpy as np
import pytest
import yaml

from transform_cache.common.errors import TransformRecordError
from transform_cache.common.stamp import Stamp
from transform_cache.reader import TransformFileReader, parse_stamp


def _write(tmp_path, content):
    path = tmp_path / "transforms.yaml"
    path.write_text(yaml.safe_dump(content))
    return path


def _record(stamp, child="base_link", translation=(1.0, 0.0, 0.0)):
    return {
        "parent_frame_id": "map",
        "child_frame_id": child,
        "stamp": stamp,
        "translation": list(translation),
        "rotation": [0.0, 0.0, 0.0, 1.0],
    }


def test_reads_dynamic_and_static(tmp_path) -> None:
    """Ensure both lists are decoded in file order."""
    path = _write(
        tmp_path,
        {
            "transforms": [_record({"sec": 5, "nanosec": 10}), _record(7.5)],
            "static_transforms": [_record({"secs": 0, "nsecs": 0}, child="laser")],
        },
    )
    reader = TransformFileReader(path)
    dynamic = reader.read_transforms()
    static = reader.read_static_transforms()

    assert [s.stamp for s in dynamic] == [Stamp(5, 10), Stamp(7, 500_000_000)]
    assert static[0].child_frame_id == "laser"
    np.testing.assert_allclose(dynamic[0].transform.translation, [1.0, 0.0, 0.0])


def test_missing_lists_are_empty(tmp_path) -> None:
    """Ensure a file without one of the lists yields no samples for it."""
    path = _write(tmp_path, {"transforms": [_record(1.0)]})
    assert TransformFileReader(path).read_static_transforms() == []


def test_malformed_entry_names_index(tmp_path) -> None:
    """Ensure a bad record raises TransformRecordError pointing at it."""
    bad = _record(2.0)
    del bad["rotation"]
    path = _write(tmp_path, {"transforms": [_record(1.0), bad]})
    with pytest.raises(TransformRecordError, match=r"transforms\[1\]"):
        TransformFileReader(path).read_transforms()


def test_bad_translation_length(tmp_path) -> None:
    """Ensure a translation with the wrong size is rejected."""
    path = _write(tmp_path, {"transforms": [_record(1.0, translation=(1.0, 2.0))]})
    with pytest.raises(TransformRecordError):
        TransformFileReader(path).read_transforms()


def test_top_level_must_be_mapping(tmp_path) -> None:
    """Ensure a list at the top level is refused."""
    path = _write(tmp_path, [_record(1.0)])
    with pytest.raises(TransformRecordError):
        TransformFileReader(path).read_transforms()


def test_parse_stamp_rejects_unknown_types() -> None:
    """Ensure only mappings and numbers decode as stamps."""
    assert parse_stamp(3) == Stamp(3)
    with pytest.raises(TypeError):
        parse_stamp("yesterday")
    with pytest.raises(TypeError):
        parse_stamp(True)


def test_fractional_mapping_stamp_rejected(tmp_path) -> None:
    """Ensure {sec: 5.5} is refused instead of truncated to 5 s."""
    with pytest.raises(TypeError):
        parse_stamp({"sec": 5.5})
    with pytest.raises(TypeError):
        parse_stamp({"sec": 5, "nanosec": 1.5})
    path = _write(tmp_path, {"transforms": [_record({"sec": 5.5})]})
    with pytest.raises(TransformRecordError, match=r"transforms\[0\]"):
        TransformFileReader(path).read_transforms()


def test_negative_stamp_rejected(tmp_path) -> None:
    """Ensure records stamped before zero are refused."""
    path = _write(tmp_path, {"transforms": [_record(-1.0)]})
    with pytest.raises(TransformRecordError):
        TransformFileReader(path).read_transforms()


def test_malformed_yaml(tmp_path) -> None:
    """Ensure a YAML syntax error surfaces as TransformRecordError."""
    path = tmp_path / "transforms.yaml"
    path.write_text("transforms: [unclosed\n")
    with pytest.raises(TransformRecordError, match="malformed YAML"):
        TransformFileReader(path).read_transforms()
