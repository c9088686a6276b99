import json
import struct

import numpy as np
import pytest
from pydantic import ValidationError

from timezonebvh.bvh import BVHInternal, BVHLeaf, build_bvh
from timezonebvh.encoding import (
    bvh_to_json,
    decode_bvh,
    decode_ring,
    encode_bvh,
    encode_ring,
    flatten_polygon_coords,
    read_bvh_json,
    reshape_to_polygon_coords,
    write_bvh_json,
)
from tests.auxiliaries import get_rnd_summaries, make_summary


def assert_node_schema(document):
    assert len(document["b"]) == 2
    assert all(len(corner) == 2 for corner in document["b"])
    if "p" in document:
        assert set(document) == {"b", "p"}
        for summary in document["p"]:
            assert set(summary) == {"tz", "i", "b", "mp"}
            assert isinstance(summary["tz"], str)
            assert isinstance(summary["i"], int)
        return 1
    assert set(document) == {"b", "l", "r"}
    return assert_node_schema(document["l"]) + assert_node_schema(document["r"])


def test_ring_layout():
    coords = np.array([[1.5, -2.0], [180.0, 90.0]])
    buffer = encode_ring(coords)
    assert len(buffer) == 16
    # interleaved little endian float32 (lng, lat) pairs without header
    assert struct.unpack("<4f", buffer) == (1.5, -2.0, 180.0, 90.0)
    assert buffer == np.array([1.5, -2.0, 180.0, 90.0], dtype="<f4").tobytes()


@pytest.mark.parametrize("seed", range(3))
def test_ring_round_trip(seed):
    rng = np.random.default_rng(seed)
    coords = np.column_stack(
        (rng.uniform(-180.0, 180.0, 50), rng.uniform(-90.0, 90.0, 50))
    )
    decoded = decode_ring(encode_ring(coords))
    assert decoded.shape == coords.shape
    # single precision rounding only
    np.testing.assert_array_equal(decoded, coords.astype(np.float32))
    np.testing.assert_allclose(decoded, coords, rtol=1e-6, atol=1e-5)


def test_decode_invalid_buffer():
    with pytest.raises(ValueError):
        decode_ring(b"\x00" * 12)
    assert decode_ring(b"").shape == (0, 2)


def test_coordinate_transformation_functions():
    coords = np.array([[0.0, 1.0], [2.0, 3.0], [4.0, 5.0]])
    flattened = flatten_polygon_coords(coords)
    np.testing.assert_array_equal(flattened, [0.0, 1.0, 2.0, 3.0, 4.0, 5.0])
    np.testing.assert_array_equal(reshape_to_polygon_coords(flattened), coords)


def test_leaf_document():
    summary = make_summary("Test/Zone", 0.0, 0.0, 1.0, 2.0)
    document = encode_bvh(build_bvh([summary]))
    assert document == {
        "b": [[0.0, 0.0], [1.0, 2.0]],
        "p": [
            {
                "tz": "Test/Zone",
                "i": 0,
                "b": [[0.0, 0.0], [1.0, 2.0]],
                "mp": [0.5, 1.0],
            }
        ],
    }


def test_internal_document():
    summaries = [
        make_summary("A", 0.0, 0.0, 1.0, 1.0),
        make_summary("B", 10.0, 0.0, 11.0, 1.0),
        make_summary("C", 20.0, 0.0, 21.0, 1.0),
    ]
    document = encode_bvh(build_bvh(summaries))
    assert document["b"] == [[0.0, 0.0], [21.0, 1.0]]
    assert "p" not in document
    assert [s["tz"] for s in document["l"]["p"]] == ["A"]
    assert [s["tz"] for s in document["r"]["p"]] == ["B", "C"]


@pytest.mark.parametrize("nr_of_polygons", [1, 2, 3, 10, 57])
def test_document_schema(nr_of_polygons):
    root = build_bvh(get_rnd_summaries(nr_of_polygons, seed=nr_of_polygons))
    document = json.loads(bvh_to_json(root))
    assert document == encode_bvh(root)
    nr_of_leaves = assert_node_schema(document)
    assert nr_of_leaves >= (nr_of_polygons + 1) // 2


@pytest.mark.parametrize("nr_of_polygons", [1, 3, 10, 57])
def test_document_round_trip(nr_of_polygons, tmp_path):
    root = build_bvh(get_rnd_summaries(nr_of_polygons, seed=nr_of_polygons))
    assert decode_bvh(encode_bvh(root)) == root

    path = tmp_path / "bvh.json"
    write_bvh_json(root, path)
    assert path.exists()
    assert read_bvh_json(path) == root


def test_decode_node_types():
    leaf_doc = {"b": [[0, 0], [1, 1]], "p": [{"tz": "A", "i": 0, "b": [[0, 0], [1, 1]], "mp": [0.5, 0.5]}]}
    internal_doc = {"b": [[0, 0], [1, 1]], "l": leaf_doc, "r": leaf_doc}
    assert isinstance(decode_bvh(leaf_doc), BVHLeaf)
    assert isinstance(decode_bvh(internal_doc), BVHInternal)


@pytest.mark.parametrize(
    "document",
    [
        # leaf without polygons
        {"b": [[0, 0], [1, 1]], "p": []},
        # internal node without right child
        {
            "b": [[0, 0], [1, 1]],
            "l": {"b": [[0, 0], [1, 1]], "p": [{"tz": "A", "i": 0, "b": [[0, 0], [1, 1]], "mp": [0.5, 0.5]}]},
        },
        # child box exceeding the node box
        {
            "b": [[0, 0], [1, 1]],
            "l": {"b": [[0, 0], [2, 2]], "p": [{"tz": "A", "i": 0, "b": [[0, 0], [2, 2]], "mp": [1, 1]}]},
            "r": {"b": [[0, 0], [1, 1]], "p": [{"tz": "B", "i": 0, "b": [[0, 0], [1, 1]], "mp": [0.5, 0.5]}]},
        },
    ],
)
def test_decode_invalid_document(document):
    with pytest.raises(ValidationError):
        decode_bvh(document)
