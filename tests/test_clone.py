"""Tests for inherit() and clone() between Attributed objects."""

import logging

import pytest

from batchexec.core import Attributed, ClonePolicy, Kind, clone, inherit
from batchexec.errors import (
    InvalidKindError,
    ReadOnlyViolationError,
    UnknownAttributeError,
)


class Job(Attributed):
    def __init__(self, **values):
        super().__init__()
        for name, value in values.items():
            self.attrs.set(name, value)

    def _define_attributes(self):
        self.attrs.define("leader", Kind.ANY, "#", "#")
        self.attrs.define("echo", Kind.BOOLEAN, 0, 0)
        self.attrs.define("maxlen", Kind.ANY, 30, 30)
        self.attrs.define("_secret", Kind.ANY, "s", "s")


class TestInheritableSet:
    """Tests for the attribute list captured at construction."""

    def test_captures_public_names(self):
        assert Job().inheritable == ("echo", "leader", "maxlen")

    def test_later_definitions_are_not_inheritable(self):
        job = Job()
        job.attrs.define("extra", Kind.ANY, 1)
        assert "extra" not in job.inheritable


class TestInherit:
    """Tests for inherit()."""

    def test_copies_inheritable(self):
        source = Job(leader="//", echo=1, maxlen=80)
        target = Job()
        assert target.inherit(source) == 3
        assert target.attrs.get("leader") == "//"
        assert target.attrs.get("echo") == 1
        assert target.attrs.get("maxlen") == 80
        assert target.attrs.get("_secret") == "s"

    def test_ignores_later_definitions(self):
        source = Job()
        source.attrs.define("extra", Kind.ANY, "from source")
        target = Job()
        target.attrs.define("extra", Kind.ANY, "mine")
        assert inherit(target, source) == 3
        assert target.attrs.get("extra") == "mine"

    def test_read_only_aborts_before_copying(self):
        source = Job(leader="//", maxlen=80)
        target = Job()
        target.attrs.ro("maxlen")
        with pytest.raises(ReadOnlyViolationError):
            target.inherit(source)
        assert target.attrs.get("leader") == "#"
        assert target.attrs.get("maxlen") == 30


class TestClone:
    """Tests for clone() under each ClonePolicy."""

    def test_normal_uses_current_attribute_list(self):
        source = Job(leader="//")
        source.attrs.define("extra", Kind.ANY, "from source")
        target = Job()
        target.attrs.define("extra", Kind.ANY, "mine")
        assert target.clone(source) == 4
        assert target.attrs.get("extra") == "from source"

    def test_normal_aborts_on_read_only(self):
        source = Job(leader="//", maxlen=80)
        target = Job()
        target.attrs.ro("leader")
        with pytest.raises(ReadOnlyViolationError):
            clone(target, source, ClonePolicy.NORMAL)
        assert target.attrs.get("maxlen") == 30

    def test_force_copies_and_restores_read_only(self):
        source = Job(leader="//", maxlen=80)
        target = Job()
        target.attrs.ro("leader")
        assert clone(target, source, ClonePolicy.FORCE) == 3
        assert target.attrs.get("leader") == "//"
        assert target.attrs.prop("leader", "read_only") is True

    def test_force_restores_read_only_on_failure(self):
        source = Job()
        source.attrs.remove("echo")
        source.attrs.define("echo", Kind.ANY, "not a flag")
        target = Job()
        target.attrs.ro("echo")
        with pytest.raises(InvalidKindError):
            clone(target, source, ClonePolicy.FORCE)
        assert target.attrs.prop("echo", "read_only") is True

    def test_skip_leaves_read_only_and_excludes_from_count(self):
        source = Job(leader="//", echo=1, maxlen=80)
        target = Job()
        target.attrs.ro("leader", "echo")
        assert clone(target, source, ClonePolicy.SKIP) == 1
        assert target.attrs.get("leader") == "#"
        assert target.attrs.get("echo") == 0
        assert target.attrs.get("maxlen") == 80

    def test_policy_accepts_string(self):
        source = Job(maxlen=80)
        target = Job()
        target.attrs.ro("maxlen")
        assert clone(target, source, "skip") == 2

    def test_missing_source_attribute(self):
        source = Job()
        target = Job()
        target.attrs.define("extra", Kind.ANY)
        with pytest.raises(UnknownAttributeError):
            target.clone(source)
        assert target.attrs.get("extra") is None

    def test_logs_count(self, caplog):
        with caplog.at_level(logging.INFO):
            Job().clone(Job(leader="//"))
        assert "cloned 3 attributes" in caplog.text
