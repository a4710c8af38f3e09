"""Unit tests for the SemanticVersion value object."""

import pytest
from hypothesis import given, strategies as st

from eke_kubectl.domain.exceptions import VersionParseError
from eke_kubectl.domain.version import SemanticVersion


prerelease_identifiers = st.one_of(
    st.integers(min_value=0, max_value=50).map(str),
    st.sampled_from(["alpha", "beta", "rc", "k3s", "x-1"]),
)
prereleases = st.lists(prerelease_identifiers, min_size=1, max_size=3).map(".".join)

versions = st.builds(
    SemanticVersion,
    major=st.integers(min_value=0, max_value=3),
    minor=st.integers(min_value=0, max_value=30),
    patch=st.integers(min_value=0, max_value=20),
    prerelease=st.none() | prereleases,
)


@pytest.mark.tier(1)
@pytest.mark.tra("Domain.Invariant.SemanticVersion")
class TestSemanticVersionParse:
    """Test SemanticVersion.parse()."""

    def test_parse_plain(self):
        """Test parsing X.Y.Z."""
        version = SemanticVersion.parse("1.20.1")
        assert (version.major, version.minor, version.patch) == (1, 20, 1)
        assert version.prerelease is None

    def test_leading_v_is_optional(self):
        """Test v1.20.1 and 1.20.1 parse to the same version."""
        assert SemanticVersion.parse("v1.20.1") == SemanticVersion.parse("1.20.1")

    def test_parse_prerelease(self):
        """Test the prerelease tag is kept."""
        version = SemanticVersion.parse("v1.21.0-rc.0")
        assert version.prerelease == "rc.0"
        assert version.is_prerelease

    def test_build_metadata_is_dropped(self):
        """Test +build metadata is accepted and ignored."""
        assert SemanticVersion.parse("v1.21.3+k3s1") == SemanticVersion(1, 21, 3)

    def test_surrounding_whitespace_is_ignored(self):
        """Test stable.txt style input with a trailing newline."""
        assert SemanticVersion.parse("v1.28.2\n") == SemanticVersion(1, 28, 2)

    @pytest.mark.parametrize(
        "value",
        ["1.x.0", "1.20", "1.20.1.4", "", "v", "1..1", "a.b.c", "1.20.1-", "1.20.1+", "-1.2.3"],
    )
    def test_invalid_versions_raise(self, value):
        """Test malformed versions raise VersionParseError."""
        with pytest.raises(VersionParseError):
            SemanticVersion.parse(value)

    def test_parse_error_is_value_error(self):
        """Test VersionParseError can be caught as ValueError."""
        with pytest.raises(ValueError):
            SemanticVersion.parse("1.x.0")

    def test_parse_error_keeps_input(self):
        """Test the offending string is attached to the error."""
        with pytest.raises(VersionParseError) as exc_info:
            SemanticVersion.parse("1.x.0")
        assert exc_info.value.version_string == "1.x.0"

    def test_non_string_rejected(self):
        """Test non-string input raises VersionParseError."""
        with pytest.raises(VersionParseError):
            SemanticVersion.parse(1.2)  # type: ignore[arg-type]

    def test_rejects_leading_zero_numeric_prerelease(self):
        """Test 01 is not a valid numeric prerelease identifier."""
        with pytest.raises(VersionParseError):
            SemanticVersion.parse("1.20.0-rc.01")


@pytest.mark.tier(1)
@pytest.mark.tra("Domain.Invariant.SemanticVersion")
class TestSemanticVersionParseTolerant:
    """Test SemanticVersion.parse_tolerant()."""

    def test_infers_patch(self):
        """Test 1.20 becomes 1.20.0."""
        assert SemanticVersion.parse_tolerant("1.20") == SemanticVersion(1, 20, 0)

    def test_infers_minor_and_patch(self):
        """Test v1 becomes 1.0.0."""
        assert SemanticVersion.parse_tolerant("v1") == SemanticVersion(1, 0, 0)

    def test_full_version_unchanged(self):
        """Test a complete version parses the same as parse()."""
        assert SemanticVersion.parse_tolerant("v1.19.1") == SemanticVersion.parse("1.19.1")

    @pytest.mark.parametrize("value", ["", "one.two", "1.x", "1.2.3.4"])
    def test_still_rejects_garbage(self, value):
        """Test tolerant parsing still fails on non-numeric input."""
        with pytest.raises(VersionParseError):
            SemanticVersion.parse_tolerant(value)


@pytest.mark.tier(1)
@pytest.mark.tra("Domain.Invariant.SemanticVersion")
class TestSemanticVersionValidation:
    """Test SemanticVersion construction validation."""

    def test_negative_component_rejected(self):
        """Test negative components raise VersionParseError."""
        with pytest.raises(VersionParseError, match="non-negative"):
            SemanticVersion(1, -1, 0)

    def test_invalid_prerelease_rejected(self):
        """Test prerelease identifiers must be alphanumeric or hyphen."""
        with pytest.raises(VersionParseError, match="prerelease"):
            SemanticVersion(1, 2, 3, prerelease="rc..1")

    def test_frozen(self):
        """Test SemanticVersion is immutable."""
        version = SemanticVersion(1, 2, 3)
        with pytest.raises(AttributeError):
            version.major = 2  # type: ignore[misc]


@pytest.mark.tier(1)
@pytest.mark.tra("Domain.Invariant.SemanticVersion")
class TestSemanticVersionFormatting:
    """Test string forms."""

    def test_str(self):
        assert str(SemanticVersion(1, 20, 1)) == "1.20.1"

    def test_str_with_prerelease(self):
        assert str(SemanticVersion(1, 21, 0, "rc.0")) == "1.21.0-rc.0"

    def test_tag(self):
        """Test tag renders the upstream release tag."""
        assert SemanticVersion(1, 20, 1).tag == "v1.20.1"


@pytest.mark.tier(1)
@pytest.mark.tra("Domain.Invariant.SemanticVersion")
class TestSemanticVersionOrdering:
    """Test SemanticVersion total ordering."""

    def test_known_order(self):
        """Test 1.20.0 < 1.20.1 < 1.21.0 < 2.0.0."""
        ordered = [SemanticVersion.parse(v) for v in ("1.20.0", "1.20.1", "1.21.0", "2.0.0")]
        assert sorted(reversed(ordered)) == ordered
        assert ordered[0] < ordered[1] < ordered[2] < ordered[3]

    def test_release_candidate_below_release(self):
        """Test 1.21.0-rc.1 sorts below 1.21.0 and above 1.20.9."""
        rc = SemanticVersion.parse("1.21.0-rc.1")
        assert SemanticVersion.parse("1.20.9") < rc < SemanticVersion.parse("1.21.0")

    def test_prerelease_identifiers_compare_per_semver(self):
        """Test numeric identifiers compare numerically and below alphanumerics."""
        chain = [
            "1.0.0-alpha",
            "1.0.0-alpha.1",
            "1.0.0-alpha.beta",
            "1.0.0-beta",
            "1.0.0-beta.2",
            "1.0.0-beta.11",
            "1.0.0-rc.1",
            "1.0.0",
        ]
        parsed = [SemanticVersion.parse(v) for v in chain]
        for lower, higher in zip(parsed, parsed[1:]):
            assert lower < higher

    def test_comparison_with_other_type_not_supported(self):
        """Test ordering against non-versions raises TypeError."""
        with pytest.raises(TypeError):
            SemanticVersion(1, 0, 0) < "1.0.0"  # type: ignore[operator]

    @given(a=versions, b=versions)
    def test_antisymmetric(self, a, b):
        """PBT: a <= b and b <= a only when a == b."""
        if a <= b and b <= a:
            assert a == b

    @given(a=versions, b=versions)
    def test_total(self, a, b):
        """PBT: exactly one of a < b, a == b, a > b holds."""
        assert sum([a < b, a == b, a > b]) == 1

    @given(a=versions, b=versions, c=versions)
    def test_transitive(self, a, b, c):
        """PBT: a <= b and b <= c implies a <= c."""
        if a <= b and b <= c:
            assert a <= c

    @given(version=versions)
    def test_str_round_trip(self, version):
        """PBT: parse(str(v)) == v."""
        assert SemanticVersion.parse(str(version)) == version
        assert SemanticVersion.parse(version.tag) == version
