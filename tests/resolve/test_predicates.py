"""Unit tests for the per-field match rules and candidate scoring."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest

from wheel_matrix.catalog.schema import Artifact
from wheel_matrix.resolve.predicates import (
    accelerator_matches,
    artifact_matches,
    framework_matches,
    has_abi_flag,
    language_matches,
    score_artifact,
)
from wheel_matrix.resolve.schema import RequestDescriptor


def make_request(**overrides) -> RequestDescriptor:
    fields = {"package_name": "pkg", "framework_version": "2.8.0", "accelerator_tag": "cu129", "language_tag": "3.13"}
    fields.update(overrides)
    return RequestDescriptor(**fields)


# ===========================================================================
# Field rule tests
# ===========================================================================


class TestFrameworkMatches:

    def test_absent(self):
        assert framework_matches(None, "2.8.0") is True

    def test_exact(self):
        assert framework_matches("2.8.0", "2.8.0") is True

    def test_major_minor(self):
        assert framework_matches("2.8", "2.8.0") is True
        assert framework_matches("2.8.1", "2.8.0") is True

    def test_different_minor(self):
        assert framework_matches("2.7.1", "2.8.0") is False

    def test_unparseable(self):
        assert framework_matches("nightly", "2.8.0") is False


class TestAcceleratorMatches:

    def test_absent(self):
        assert accelerator_matches(None, "12.9") is True

    def test_dotted(self):
        assert accelerator_matches("12.9", "12.9") is True

    def test_compact_cell(self):
        assert accelerator_matches("cu129", "12.9") is True

    def test_noisy_cell(self):
        assert accelerator_matches("CUDA 12.8 / 12.9", "12.9") is True

    def test_noisy_compact_cell(self):
        assert accelerator_matches("built with cu128", "12.8") is True

    def test_mismatch(self):
        assert accelerator_matches("12.8", "12.9") is False


class TestLanguageMatches:

    def test_absent(self):
        assert language_matches(None, "3.13") is True

    def test_exact(self):
        assert language_matches("3.13", "3.13") is True

    def test_list_cell(self):
        assert language_matches("3.10, 3.11, 3.12", "3.11") is True

    def test_cp_tag(self):
        assert language_matches("cp313", "3.13") is True

    def test_prefix_is_not_a_match(self):
        assert language_matches("3.13", "3.1") is False

    @pytest.mark.parametrize("cell", ["abi3", "ABI3", "py3", "cp39+", "cp39-abi3"])
    def test_neutral_markers_need_relaxation(self, cell):
        assert language_matches(cell, "3.11", abi_relaxed=False) is False
        assert language_matches(cell, "3.11", abi_relaxed=True) is True

    def test_versioned_py_tag_is_not_neutral(self):
        assert language_matches("py312", "3.11", abi_relaxed=True) is False

    def test_dotted_py_tag_is_not_neutral(self):
        assert language_matches("py3.13", "3.11", abi_relaxed=True) is False


class TestArtifactMatches:

    @pytest.mark.parametrize("missing", ["framework_version", "accelerator_tag", "language_tag"])
    def test_each_absent_field_is_permissive(self, missing):
        fields = {"framework_version": "2.8.0", "accelerator_tag": "12.9", "language_tag": "3.13"}
        fields[missing] = None
        artifact = Artifact(package_name="pkg", url="https://x/a.whl", **fields)
        assert artifact_matches(artifact, make_request(), "12.9", abi_relaxed=False) is True

    def test_all_absent(self):
        artifact = Artifact(package_name="pkg", url="https://x/a.whl")
        assert artifact_matches(artifact, make_request(), "12.9", abi_relaxed=False) is True

    def test_stepped_accelerator(self):
        artifact = Artifact(package_name="pkg", url="https://x/a.whl", accelerator_tag="12.8")
        assert artifact_matches(artifact, make_request(), "12.9", abi_relaxed=False) is False
        assert artifact_matches(artifact, make_request(), "12.8", abi_relaxed=False) is True


# ===========================================================================
# Scoring tests
# ===========================================================================


class TestScoreArtifact:

    def test_full_exact_match(self):
        artifact = Artifact(package_name="pkg", url="u", framework_version="2.8.0", accelerator_tag="12.9", language_tag="3.13")
        assert score_artifact(artifact, make_request(), "12.9") == 6

    def test_major_minor_only(self):
        artifact = Artifact(package_name="pkg", url="u", framework_version="2.8")
        assert score_artifact(artifact, make_request(), "12.9") == 2

    def test_accelerator_only(self):
        artifact = Artifact(package_name="pkg", url="u", accelerator_tag="cu129")
        assert score_artifact(artifact, make_request(), "12.9") == 2

    def test_unpublished_fields_score_nothing(self):
        assert score_artifact(Artifact(package_name="pkg", url="u"), make_request(), "12.9") == 0

    def test_relaxed_language_earns_no_language_point(self):
        artifact = Artifact(package_name="pkg", url="u", language_tag="abi3")
        assert score_artifact(artifact, make_request(), "12.9") == 0

    def test_abi_flag_point(self):
        artifact = Artifact(package_name="pkg", url="u", raw_record={"cxx11abi": "TRUE"})
        assert score_artifact(artifact, make_request(), "12.9") == 1


class TestHasAbiFlag:

    def test_bool(self):
        assert has_abi_flag({"abi3": True}) is True

    def test_string(self):
        assert has_abi_flag({"prebuilt_abi": "yes"}) is True

    def test_false(self):
        assert has_abi_flag({"cxx11abi": "FALSE", "abi3": False}) is False

    def test_unrelated_keys(self):
        assert has_abi_flag({"torch": "2.8.0"}) is False
