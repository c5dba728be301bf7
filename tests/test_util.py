"""Tests for environment comparison and event pattern helpers."""

import pytest
from aws_cdk import Aws

from event_rules import merge_event_pattern, render_event_pattern, same_env_dimension


class TestSameEnvDimension:
    """Tests for same_env_dimension."""

    def test_equal_concrete_values_match(self):
        assert same_env_dimension("111111111111", "111111111111")

    def test_different_concrete_values_do_not_match(self):
        assert not same_env_dimension("111111111111", "222222222222")

    def test_token_matches_any_concrete_value(self):
        assert same_env_dimension(Aws.ACCOUNT_ID, "222222222222")
        assert same_env_dimension("222222222222", Aws.ACCOUNT_ID)

    def test_token_matches_itself(self):
        assert same_env_dimension(Aws.REGION, Aws.REGION)

    def test_two_different_tokens_match(self):
        """Unresolved values are assumed to agree once deployed."""
        assert same_env_dimension(Aws.REGION, Aws.ACCOUNT_ID)


class TestMergeEventPattern:
    """Tests for merge_event_pattern."""

    def test_merge_into_empty(self):
        assert merge_event_pattern({}, {"source": ["aws.ec2"]}) == {"source": ["aws.ec2"]}

    def test_lists_are_concatenated_without_duplicates(self):
        dest = {"resources": ["r1", "r2"]}

        merge_event_pattern(dest, {"resources": ["r2", "r3"]})

        assert dest == {"resources": ["r1", "r2", "r3"]}

    def test_nested_objects_are_merged(self):
        dest = {"resources": ["r1"], "detail": {"hello": [1]}}

        merge_event_pattern(dest, {"resources": ["r2"], "detail": {"foo": ["bar"]}})

        assert dest == {
            "resources": ["r1", "r2"],
            "detail": {"hello": [1], "foo": ["bar"]},
        }

    def test_none_values_are_skipped(self):
        dest = {"source": ["a"]}

        merge_event_pattern(dest, {"source": None, "account": None})

        assert dest == {"source": ["a"]}

    def test_object_values_in_lists_are_deduplicated(self):
        dest = {"detail": {"size": [{"numeric": [">", 10]}]}}

        merge_event_pattern(dest, {"detail": {"size": [{"numeric": [">", 10]}, "small"]}})

        assert dest == {"detail": {"size": [{"numeric": [">", 10]}, "small"]}}

    def test_merged_values_are_copied(self):
        src = {"detail": {"state": ["running"]}}
        dest = {}

        merge_event_pattern(dest, src)
        dest["detail"]["state"].append("stopped")

        assert src == {"detail": {"state": ["running"]}}

    def test_scalar_leaf_raises_error(self):
        with pytest.raises(ValueError, match="expecting objects or arrays as leaves"):
            merge_event_pattern({}, {"source": "aws.ec2"})

    def test_list_and_object_mismatch_raises_error(self):
        with pytest.raises(ValueError, match="both sides must be arrays"):
            merge_event_pattern({"detail": {"a": ["b"]}}, {"detail": ["c"]})


class TestRenderEventPattern:
    """Tests for render_event_pattern."""

    def test_empty_pattern_renders_none(self):
        assert render_event_pattern({}) is None

    def test_detail_type_uses_wire_name(self):
        rendered = render_event_pattern({"detail_type": ["Scheduled Event"], "source": ["aws.events"]})

        assert rendered == {"detail-type": ["Scheduled Event"], "source": ["aws.events"]}
