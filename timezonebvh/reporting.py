"""
Module for reporting statistics about a built timezone index:
the polygon catalog (simplification, filtered polygons) and the shape of the BVH.
"""

from collections import Counter
from typing import List, Union

from timezonebvh.bvh import BVHInternal, BVHLeaf, count_nodes, iter_leaves, tree_height
from timezonebvh.catalog import PolygonCatalog
from timezonebvh.utils import percent, print_rst_table, rst_title


def compile_catalog_rows(catalog: PolygonCatalog) -> List[List[str]]:
    stats = catalog.statistics
    return [
        ["features", str(stats.nr_of_features)],
        ["skipped features (unsupported geometry)", str(stats.nr_of_skipped_features)],
        ["zones", str(catalog.nr_of_zones)],
        ["boundary rings", str(stats.nr_of_rings)],
        ["degenerate rings (zero area)", str(stats.nr_of_degenerate_rings)],
        ["polygons in the catalog", str(catalog.nr_of_polygons)],
        ["coordinates (original)", str(stats.nr_of_coords_original)],
        ["coordinates (simplified)", str(stats.nr_of_coords_simplified)],
        [
            "coordinates kept",
            f"{percent(stats.nr_of_coords_simplified, stats.nr_of_coords_original)}%",
        ],
    ]


def compile_bvh_rows(root: Union[BVHLeaf, BVHInternal]) -> List[List[str]]:
    leaf_sizes = Counter(len(leaf.polygons) for leaf in iter_leaves(root))
    return [
        ["nodes", str(count_nodes(root))],
        ["leaves", str(sum(leaf_sizes.values()))],
        ["leaves with 1 polygon", str(leaf_sizes[1])],
        ["leaves with 2 polygons", str(leaf_sizes[2])],
        ["height", str(tree_height(root))],
    ]


def print_build_report(
    catalog: PolygonCatalog, root: Union[BVHLeaf, BVHInternal]
) -> None:
    print(rst_title("Polygon Catalog", level=1))
    print_rst_table(["Metric", "Value"], compile_catalog_rows(catalog))
    print(rst_title("Bounding Volume Hierarchy", level=1))
    print_rst_table(["Metric", "Value"], compile_bvh_rows(root))
