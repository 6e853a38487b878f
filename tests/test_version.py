import pytest

from commonapi.version import Version


def test_default_version_is_zero():
    assert Version() == Version(0, 0)


def test_str_matches_address_version_format():
    assert str(Version(1, 0)) == "v1_0"


def test_ordering_major_then_minor():
    versions = [Version(2, 0), Version(1, 5), Version(1, 0)]
    assert sorted(versions) == [Version(1, 0), Version(1, 5), Version(2, 0)]


def test_equality_compares_both_fields():
    assert Version(3, 4) == Version(3, 4)
    assert not Version(3, 4) == Version(4, 3)


@pytest.mark.parametrize("major, minor", [(-1, 0), (0, -1), (2**32, 0), (0, 2**32)])
def test_out_of_range_rejected(major, minor):
    with pytest.raises(ValueError):
        Version(major, minor)


def test_upper_bound_accepted():
    version = Version(2**32 - 1, 2**32 - 1)
    assert version.major == 2**32 - 1
    assert version.minor == 2**32 - 1