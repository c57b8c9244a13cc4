import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[3] / 'backend'))
from group_version_kind import FormatError, GroupVersionKind


def test_parse_default_workload_type():
    gvk = GroupVersionKind.parse('core.hydra.io/v1alpha1.Singleton')
    assert gvk == GroupVersionKind.new('core.hydra.io', 'v1alpha1', 'Singleton')
    assert gvk.api_version == 'core.hydra.io/v1alpha1'
    assert str(gvk) == 'core.hydra.io/v1alpha1.Singleton'


def test_missing_slash():
    with pytest.raises(FormatError, match='missing version and kind'):
        GroupVersionKind.parse('missing-slash')


def test_missing_dot_after_slash():
    with pytest.raises(FormatError, match='missing kind'):
        GroupVersionKind.parse('group/noversionkind')


def test_dots_in_group_are_kept_before_slash():
    gvk = GroupVersionKind.parse('a.b.c/v1.Kind')
    assert (gvk.group, gvk.version, gvk.kind) == ('a.b.c', 'v1', 'Kind')


def test_kind_keeps_remaining_dots_and_slashes():
    gvk = GroupVersionKind.parse('g/v1.Kind.Sub')
    assert gvk.kind == 'Kind.Sub'
    gvk = GroupVersionKind.parse('g/v1/x.Kind')
    assert (gvk.version, gvk.kind) == ('v1/x', 'Kind')


def test_empty_segments_are_not_validated():
    gvk = GroupVersionKind.parse('/.')
    assert (gvk.group, gvk.version, gvk.kind) == ('', '', '')


def test_new_does_not_validate():
    gvk = GroupVersionKind.new('', 'v 1', 'not/a.kind')
    assert gvk.version == 'v 1'
    assert gvk.kind == 'not/a.kind'
