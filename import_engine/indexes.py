"""
import_engine.indexes - One-shot snapshot of a group's labels and locations.

The snapshot is taken once per import and then extended in place as
rows create new labels and locations, so later rows see what earlier
rows made.  It is never re-read from the store mid-batch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from import_engine.errors import CatalogLookupError
from import_engine.paths import serialize_location

logger = logging.getLogger(__name__)


@dataclass
class CatalogIndex:
    paths: dict[str, str] = field(default_factory=dict)    # "A/B/C" → location id
    labels: dict[str, str] = field(default_factory=dict)   # label name → label id


def build_indexes(repo, group_id: str) -> CatalogIndex:
    """
    Load every label and the whole location forest for *group_id*.

    Every node is indexed under its full path, internal nodes included,
    so a row may point at a location at any depth.  Two siblings with
    the same name share a key; the one visited last wins.
    """
    try:
        labels = repo.get_all_labels(group_id)
        forest = repo.get_location_tree(group_id)
    except Exception as exc:
        raise CatalogLookupError(f"Could not load catalog for group {group_id}: {exc}") from exc

    index = CatalogIndex()
    for label in labels:
        index.labels[label["name"]] = label["id"]

    # Depth-first, explicit stack of (node, ancestor names)
    stack = [(node, ()) for node in reversed(forest)]
    while stack:
        node, parents = stack.pop()
        path = parents + (node["name"],)
        key = serialize_location(path)

        if key in index.paths:
            logger.warning(f"Duplicate location path {key!r}; using {node['id']}")
        index.paths[key] = node["id"]

        for child in reversed(node.get("children") or ()):
            stack.append((child, path))

    logger.debug(f"Indexed {len(index.labels)} labels, {len(index.paths)} location paths")
    return index
