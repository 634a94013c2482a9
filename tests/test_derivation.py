"""
Tests for DerivationPath and the organizational path templates
"""
import pytest

from orgkeys.core import InvalidIndexTypeError, PathError
from orgkeys.wallet import DerivationIndex, DerivationPath, OrgUnit, PathTemplate, build_path, derive_indices, \
    resolve_template, standalone_department_index

H = DerivationIndex.hardened
UNIT = OrgUnit("GroupA", "Finance", "Approver")


def test_standard_template():
    indices = derive_indices(UNIT)
    path = build_path(PathTemplate.STANDARD, UNIT, 3)
    assert tuple(path) == (0x8000002C, 0x8000003C, indices.entity, indices.department, 3)
    assert str(path) == f"m/44'/60'/{indices.entity.level}'/{indices.department.level}'/3"


def test_role_extended_template():
    indices = derive_indices(UNIT)
    path = build_path("roleExtended", UNIT, 0)
    assert tuple(path) == (0x8000003C, indices.entity, indices.department, indices.role, 0)

    with pytest.raises(PathError):
        build_path(PathTemplate.ROLE_EXTENDED, OrgUnit("GroupA", "Finance"), 0)


def test_simplified_template():
    path = build_path(PathTemplate.SIMPLIFIED, OrgUnit("", "Finance"), 9)
    assert tuple(path) == (0x8000002C, 0x8000003C, standalone_department_index("Finance"), 0, 9)
    assert str(path).endswith("'/0/9")


def test_account_level_is_normal():
    for template in PathTemplate:
        path = template.path(UNIT, 12)
        assert not path[-1].is_hardened, f"{template.value} account level must be non-hardened"
        assert path[-1] == 12
        assert path.parent == template.parent_path(UNIT)
        # SIMPLIFIED keeps its normal change slot in the public part
        expected_public_from = len(path) - 2 if template == PathTemplate.SIMPLIFIED else len(path) - 1
        assert path.public_from == expected_public_from


def test_template_names():
    assert PathTemplate.from_name("standard") is PathTemplate.STANDARD
    assert PathTemplate.from_name("simplified") is PathTemplate.SIMPLIFIED
    with pytest.raises(PathError):
        PathTemplate.from_name("bip44")

    for template in PathTemplate:
        assert resolve_template(template) is template
        assert resolve_template(template.value) is template
    with pytest.raises(PathError):
        resolve_template(None)


def test_account_index_range():
    with pytest.raises(InvalidIndexTypeError):
        build_path(PathTemplate.STANDARD, UNIT, 2 ** 31)
    with pytest.raises(InvalidIndexTypeError):
        build_path(PathTemplate.STANDARD, UNIT, -1)


def test_path_string_round_trip():
    path = build_path(PathTemplate.STANDARD, UNIT, 7)
    assert DerivationPath.from_string(str(path)) == path
    assert DerivationPath.from_string("m/44h/60H/0'/0/0") == DerivationPath.of(H(44), H(60), H(0), 0, 0)


@pytest.mark.parametrize("bad_path", ["", "m", "44'/60'", "m/", "m/a", "m/1''", "m/-1"])
def test_malformed_path_strings(bad_path):
    with pytest.raises(PathError):
        DerivationPath.from_string(bad_path)


def test_empty_and_invalid_paths():
    with pytest.raises(PathError):
        DerivationPath(())
    with pytest.raises(InvalidIndexTypeError):
        DerivationPath.of(0, 2 ** 32)


def test_prefix_relationships():
    department = PathTemplate.STANDARD.parent_path(UNIT)
    account = department.child(4)
    other = PathTemplate.STANDARD.parent_path(OrgUnit("GroupA", "Operations")).child(4)

    assert department.is_ancestor_of(account)
    assert department.parent.is_ancestor_of(other), "Departments of one entity share the entity prefix"
    assert not department.is_ancestor_of(other)
    assert not account.is_ancestor_of(department)
    assert not account.is_ancestor_of(account)
