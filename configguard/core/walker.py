"""Recursive secret scan over nested configuration trees."""

from collections.abc import Mapping
from typing import Any, Optional, Set

from configguard.core.detector import SecretDetector, get_default_detector
from configguard.core.exceptions import CircularReferenceError
from configguard.core.models import SecretFinding, SecurityResult, UnsafeValue
from configguard.utils.logger import get_logger

logger = get_logger(__name__)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def join_key(path: str, key: Any) -> str:
    """Extend a traversal path with a mapping key."""
    key = str(key)
    return f"{path}.{key}" if path else key


def join_index(path: str, index: int) -> str:
    """Extend a traversal path with a sequence index."""
    return f"{path}[{index}]"


class ConfigWalker:
    """
    Applies a :class:`SecretDetector` to every string leaf of a tree.

    Mappings are visited in insertion order and sequences in index order, so
    the findings list is reproducible for the same input. Containers currently
    on the traversal stack are tracked by identity; re-entering one raises
    :class:`CircularReferenceError`. The same container reached through two
    different branches is scanned twice and is not a cycle.
    """

    def __init__(self, detector: Optional[SecretDetector] = None):
        self.detector = detector or get_default_detector()

    def walk(self, tree: Any) -> SecurityResult:
        """
        Scan a configuration tree.

        Args:
            tree: Nested mapping/sequence structure of JSON-like values

        Returns:
            SecurityResult with one finding per flagged leaf
        """
        result = SecurityResult()
        self._visit(tree, "", "", result, set(), allowed=False)
        logger.debug(
            f"Scanned tree: {result.total_count} secret(s), {len(result.allowed)} allowed"
        )
        return result

    def _visit(self, node: Any, path: str, key: str, result: SecurityResult,
               active: Set[int], allowed: bool) -> None:
        # unsafe() around a subtree allows every leaf below it
        if isinstance(node, UnsafeValue):
            self._visit(node.value, path, key, result, active, allowed=True)
            return

        if isinstance(node, Mapping) or _is_sequence(node):
            node_id = id(node)
            if node_id in active:
                raise CircularReferenceError(path)
            active.add(node_id)
            try:
                if isinstance(node, Mapping):
                    for child_key, child in node.items():
                        self._visit(child, join_key(path, child_key), str(child_key),
                                    result, active, allowed)
                else:
                    for index, child in enumerate(node):
                        self._visit(child, join_index(path, index), key,
                                    result, active, allowed)
            finally:
                active.discard(node_id)
            return

        if isinstance(node, str):
            self._classify_leaf(node, path, key, result, allowed)

    def _classify_leaf(self, value: str, path: str, key: str, result: SecurityResult,
                       allowed: bool) -> None:
        verdict = self.detector.is_potentially_a_secret(key, value)
        if not verdict.is_secret:
            return

        finding = SecretFinding(
            path=path,
            key=key,
            reason=verdict.reason,
            confidence=verdict.confidence,
            category=verdict.category,
        )
        if allowed:
            result.allowed.append(finding)
        else:
            result.add(finding)


def has_secrets(tree: Any, detector: Optional[SecretDetector] = None) -> SecurityResult:
    """Scan ``tree`` and return the aggregate security result."""
    return ConfigWalker(detector).walk(tree)


def unwrap_unsafe(tree: Any) -> Any:
    """
    Copy ``tree`` with every :class:`UnsafeValue` replaced by its raw value.

    Mappings become dicts and tuples stay tuples; scalars are returned as-is.
    """
    return _unwrap(tree, "", set())


def _unwrap(node: Any, path: str, active: Set[int]) -> Any:
    if isinstance(node, UnsafeValue):
        return _unwrap(node.value, path, active)
    if isinstance(node, Mapping) or _is_sequence(node):
        node_id = id(node)
        if node_id in active:
            raise CircularReferenceError(path)
        active.add(node_id)
        try:
            if isinstance(node, Mapping):
                return {k: _unwrap(v, join_key(path, k), active) for k, v in node.items()}
            items = [_unwrap(v, join_index(path, i), active) for i, v in enumerate(node)]
            return tuple(items) if isinstance(node, tuple) else items
        finally:
            active.discard(node_id)
    return node
