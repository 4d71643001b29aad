"""Tests for the GenerationRequest value object."""

from __future__ import annotations

import dataclasses
import time

import pytest

from generation.request import GenerationRequest


class TestGenerationRequest:
    """Tests for construction, trimming and structural equality."""

    def test_equal_regardless_of_timestamp(self):
        """Test requests with the same input and style are equal."""
        first = GenerationRequest("same", "Creative")
        time.sleep(0.01)
        second = GenerationRequest("same", "Creative")

        assert first.created_at != second.created_at
        assert first == second
        assert hash(first) == hash(second)

    def test_trims_fields(self):
        """Test surrounding whitespace is removed."""
        request = GenerationRequest("  hello  ", " Academic ")

        assert request.input_text == "hello"
        assert request.style_name == "Academic"
        assert request == GenerationRequest("hello", "Academic")

    def test_differs_by_style(self):
        """Test the style name takes part in equality."""
        assert GenerationRequest("same", "Creative") != GenerationRequest("same", "Academic")

    @pytest.mark.parametrize("bad", [None, "", "   "])
    def test_rejects_empty_input(self, bad):
        """Test empty input fails at construction."""
        with pytest.raises(ValueError, match="Input"):
            GenerationRequest(bad, "Creative")

    @pytest.mark.parametrize("bad", [None, "", "  "])
    def test_rejects_empty_style(self, bad):
        """Test an empty style name fails at construction."""
        with pytest.raises(ValueError, match="Strategy name"):
            GenerationRequest("text", bad)

    def test_is_immutable(self):
        """Test fields cannot be reassigned."""
        request = GenerationRequest("text", "Creative")
        with pytest.raises(dataclasses.FrozenInstanceError):
            request.input_text = "other"

    def test_usable_as_set_member(self):
        """Test duplicates collapse in a set."""
        requests = {GenerationRequest("a", "Creative"), GenerationRequest("a", "Creative")}
        assert len(requests) == 1
