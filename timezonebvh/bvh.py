"""bounding volume hierarchy (BVH) of the timezone polygons

binary tree where the bounding box of every node contains the bounding boxes of its children.
the polygons are recursively split at the median of their bounding box midpoints
along the axis of the largest extent of the node bounding box.

the node models carry short aliases, which at the same time are the field names of the JSON document.
"""

from typing import Any, Iterator, List, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, model_validator
from typing_extensions import Annotated

from timezonebvh.catalog import PolygonSummary
from timezonebvh.configs import LAT_AXIS, LNG_AXIS
from timezonebvh.geometry import BoundingBox, union_bbox

# a leaf holds at most this many polygons
MAX_LEAF_SIZE = 2


class BVHLeaf(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    bounding_box: BoundingBox = Field(alias="b")
    polygons: Tuple[PolygonSummary, ...] = Field(
        alias="p", min_length=1, max_length=MAX_LEAF_SIZE
    )


class BVHInternal(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    bounding_box: BoundingBox = Field(alias="b")
    left: "BVHNode" = Field(alias="l")
    right: "BVHNode" = Field(alias="r")

    @model_validator(mode="after")
    def validate_containment(self) -> "BVHInternal":
        for child in (self.left, self.right):
            if not self.bounding_box.contains(child.bounding_box):
                raise ValueError(
                    f"node bounding box {self.bounding_box} does not contain the child box {child.bounding_box}"
                )
        return self


def _node_kind(value: Any) -> str:
    if isinstance(value, dict):
        return "leaf" if ("p" in value or "polygons" in value) else "internal"
    return "leaf" if isinstance(value, BVHLeaf) else "internal"


BVHNode = Annotated[
    Union[
        Annotated[BVHLeaf, Tag("leaf")],
        Annotated[BVHInternal, Tag("internal")],
    ],
    Discriminator(_node_kind),
]

BVHInternal.model_rebuild()


def split_axis(bbox: BoundingBox) -> int:
    """the axis of the larger extent of the box. ties favour the longitude"""
    return LNG_AXIS if bbox.width >= bbox.height else LAT_AXIS


def build_bvh(summaries: Sequence[PolygonSummary]) -> Union[BVHLeaf, BVHInternal]:
    """recursively partitions the polygons into a binary tree

    :param summaries: all polygons to index, the order is only relevant for breaking ties
    :return: the root node
    """
    if len(summaries) == 0:
        raise ValueError("cannot build a BVH without any polygons")

    bbox = union_bbox(s.bounding_box for s in summaries)
    if len(summaries) <= MAX_LEAF_SIZE:
        return BVHLeaf(bounding_box=bbox, polygons=tuple(summaries))

    axis = split_axis(bbox)
    # NOTE: sorted() is stable. equal midpoints keep their input order -> reproducible tree shape
    sorted_summaries = sorted(summaries, key=lambda s: s.midpoint[axis])
    split_idx = len(sorted_summaries) // 2
    return BVHInternal(
        bounding_box=bbox,
        left=build_bvh(sorted_summaries[:split_idx]),
        right=build_bvh(sorted_summaries[split_idx:]),
    )


def iter_leaves(node: Union[BVHLeaf, BVHInternal]) -> Iterator[BVHLeaf]:
    """all leaves from left to right"""
    stack: List[Union[BVHLeaf, BVHInternal]] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, BVHLeaf):
            yield current
        else:
            stack.append(current.right)
            stack.append(current.left)


def iter_polygons(node: Union[BVHLeaf, BVHInternal]) -> Iterator[PolygonSummary]:
    for leaf in iter_leaves(node):
        yield from leaf.polygons


def tree_height(node: Union[BVHLeaf, BVHInternal]) -> int:
    """the number of edges on the longest path from the node to a leaf"""
    if isinstance(node, BVHLeaf):
        return 0
    return 1 + max(tree_height(node.left), tree_height(node.right))


def count_nodes(node: Union[BVHLeaf, BVHInternal]) -> int:
    if isinstance(node, BVHLeaf):
        return 1
    return 1 + count_nodes(node.left) + count_nodes(node.right)
