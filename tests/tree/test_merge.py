"""Tests for the three merge strategies."""

import pathtree.tree as tree
import pathtree.tree._merge as _merge


class TestCombine:
    """Tests for the two-value combine rules."""

    def test_shallow_replaces_nested_mapping(self) -> None:
        result = _merge.combine(
            {"a": {"b": 1, "c": 2}}, {"a": {"b": 3}}, tree.MergeStrategy.SHALLOW
        )

        assert result == {"a": {"b": 3}}

    def test_shallow_lists_are_replaced(self) -> None:
        result = _merge.combine({"a": [1, 2]}, {"a": [3]}, tree.MergeStrategy.SHALLOW)

        assert result == {"a": [3]}

    def test_recursive_scalars_accumulate(self) -> None:
        result = _merge.combine(
            {"a": {"b": 1}}, {"a": {"b": 2}}, tree.MergeStrategy.RECURSIVE
        )

        assert result == {"a": {"b": [1, 2]}}

    def test_recursive_lists_concatenate(self) -> None:
        result = _merge.combine({"a": [1, 2]}, {"a": [3]}, tree.MergeStrategy.RECURSIVE)

        assert result == {"a": [1, 2, 3]}

    def test_recursive_list_and_scalar(self) -> None:
        assert _merge.merge_recursive([1], 2) == [1, 2]
        assert _merge.merge_recursive(1, [2]) == [1, 2]

    def test_recursive_mapping_and_scalar_accumulate(self) -> None:
        """The scalar is not filed into the mapping under a new integer key."""
        result = _merge.merge_recursive({"a": {"x": 1}}, {"a": 2})

        assert result == {"a": [{"x": 1}, 2]}

    def test_recursive_equal_scalars_still_accumulate(self) -> None:
        assert _merge.merge_recursive({"a": "x"}, {"a": "x"}) == {"a": ["x", "x"]}

    def test_distinct_overwrites(self) -> None:
        result = _merge.combine(
            {"a": {"b": 1}}, {"a": {"b": 2}}, tree.MergeStrategy.DISTINCT
        )

        assert result == {"a": {"b": 2}}

    def test_distinct_lists_are_replaced(self) -> None:
        result = _merge.combine(
            {"a": {"l": [1, 2], "k": 1}}, {"a": {"l": [3]}}, tree.MergeStrategy.DISTINCT
        )

        assert result == {"a": {"l": [3], "k": 1}}

    def test_new_keys_are_added(self) -> None:
        for strategy in tree.MergeStrategy:
            assert _merge.combine({"a": 1}, {"b": 2}, strategy) == {"a": 1, "b": 2}

    def test_inputs_not_mutated(self) -> None:
        base = {"a": {"b": [1]}}
        incoming = {"a": {"b": [2], "c": 3}}
        _merge.combine(base, incoming, tree.MergeStrategy.RECURSIVE)

        assert base == {"a": {"b": [1]}}
        assert incoming == {"a": {"b": [2], "c": 3}}

    def test_result_does_not_alias_incoming(self) -> None:
        incoming = {"a": {"b": [2]}}
        result = _merge.combine({}, incoming, tree.MergeStrategy.DISTINCT)
        incoming["a"]["b"].append(3)

        assert result == {"a": {"b": [2]}}

    def test_integer_keys_kept(self) -> None:
        result = _merge.combine({0: "a"}, {5: "b"}, tree.MergeStrategy.SHALLOW)

        assert result == {0: "a", 5: "b"}


class TestTreeMerge:
    """Tests for PathTree.merge*() dispatch."""

    def test_merge_mapping_at_root(self) -> None:
        built = tree.PathTree({"foo": "bar"})
        built.merge({"foo": "baz", "qux": 1})

        assert built.all() == {"foo": "baz", "qux": 1}

    def test_merge_tree_at_root(self) -> None:
        built = tree.PathTree({"foo": "bar"})
        built.merge(tree.PathTree({"baz": "qux"}))

        assert built.all() == {"foo": "bar", "baz": "qux"}

    def test_merge_at_path(self) -> None:
        built = tree.PathTree({"db": {"host": "localhost"}})
        built.merge("db", {"port": 5432})

        assert built.get("db") == {"host": "localhost", "port": 5432}

    def test_merge_tree_at_path(self) -> None:
        built = tree.PathTree({"db": {"host": "localhost"}})
        built.merge("db", tree.PathTree({"host": "remote"}))

        assert built.get("db.host") == "remote"

    def test_merge_at_missing_path(self, empty_tree: tree.PathTree) -> None:
        empty_tree.merge("a.b", {"c": 1})

        assert empty_tree.all() == {"a": {"b": {"c": 1}}}

    def test_merge_recursive_at_path(self) -> None:
        built = tree.PathTree({"a": {"b": {"c": 1}}})
        built.merge_recursive("a", {"b": {"c": 2, "d": 3}})

        assert built.get("a.b") == {"c": [1, 2], "d": 3}

    def test_merge_recursive_distinct_at_root(self) -> None:
        built = tree.PathTree({"a": {"b": 1, "c": 1}})
        built.merge_recursive_distinct({"a": {"b": 2}})

        assert built.all() == {"a": {"b": 2, "c": 1}}

    def test_merge_none_is_noop(self) -> None:
        built = tree.PathTree({"a": 1})

        assert built.merge(None) is built
        assert built.all() == {"a": 1}

    def test_merge_does_not_alias_source(self) -> None:
        source = {"a": {"b": [1]}}
        built = tree.PathTree()
        built.merge(source)
        source["a"]["b"].append(2)

        assert built.get("a.b") == [1]

    def test_returns_tree(self, empty_tree: tree.PathTree) -> None:
        assert empty_tree.merge({"a": 1}) is empty_tree
        assert empty_tree.merge_recursive({"a": 2}) is empty_tree
        assert empty_tree.merge_recursive_distinct({"a": 3}) is empty_tree

    def test_merge_list_at_root(self) -> None:
        """A list merges like the integer-keyed root the constructor builds."""
        built = tree.PathTree(["a"])
        built.merge(["b"])

        assert built.all() == {0: "b"}

    def test_merge_recursive_list_at_root(self) -> None:
        built = tree.PathTree(["a"])
        built.merge_recursive(["b", "c"])

        assert built.all() == {0: ["a", "b"], 1: "c"}

    def test_merge_recursive_distinct_tuple_at_root(self) -> None:
        built = tree.PathTree({"x": 1})
        built.merge_recursive_distinct(("y",))

        assert built.all() == {"x": 1, 0: "y"}

    def test_merge_list_keeps_binding(self) -> None:
        config: dict[object, object] = {0: "a"}
        tree.PathTree.bind(config).merge(["b", "c"])

        assert config == {0: "b", 1: "c"}
