"""Tests for alias assignment and resolution."""

import asyncio
import itertools

import pytest

from shortlinks.core.errors import (
    AliasSpaceExhaustedError,
    AliasTakenError,
    AssignmentCancelledError,
    LinkNotFoundError,
    StorageError,
    StorageFailureError,
)
from shortlinks.services import AliasAssigner, Assignment, LinkResolver

from .fakes import BrokenStore, CollidingStore, ScriptedStore


def counting_generator(aliases):
    """Generator that hands out the given aliases in order and counts calls."""
    source = iter(aliases)

    def generate(length):
        generate.calls += 1
        return next(source)

    generate.calls = 0
    return generate


class TestAssignerConfiguration:
    """Tests for AliasAssigner construction."""

    def test_defaults(self):
        """Test the default alias length and retry count."""
        assigner = AliasAssigner(ScriptedStore())
        assert assigner.alias_length == 6
        assert assigner.max_retries == 5

    @pytest.mark.parametrize("kwargs", [{"alias_length": 0}, {"max_retries": 0}])
    def test_rejects_non_positive_settings(self, kwargs):
        """Test that zero length or zero retries is rejected."""
        with pytest.raises(ValueError):
            AliasAssigner(ScriptedStore(), **kwargs)


class TestRequestedAlias:
    """Tests for assignment with a caller-supplied alias."""

    def test_success(self):
        """Test the requested alias is bound as-is."""
        store = ScriptedStore()
        assignment = asyncio.run(
            AliasAssigner(store).assign("https://example.com", "mylink")
        )
        assert assignment == Assignment(alias="mylink", id=1)
        assert store.links["mylink"] == "https://example.com"

    def test_taken_alias_is_not_retried(self):
        """Test a taken alias fails after exactly one save."""
        store = ScriptedStore(taken=["mylink"])
        generator = counting_generator([])
        assigner = AliasAssigner(store, generator=generator)

        with pytest.raises(AliasTakenError) as exc_info:
            asyncio.run(assigner.assign("https://b.com", "mylink"))

        assert exc_info.value.alias == "mylink"
        assert store.saved_aliases == ["mylink"]
        assert generator.calls == 0
        assert store.lookups == 0

    def test_storage_failure(self):
        """Test a non-collision failure is reported as a storage failure."""
        store = BrokenStore()
        with pytest.raises(StorageFailureError):
            asyncio.run(AliasAssigner(store).assign("https://example.com", "mylink"))
        assert store.calls == 1


class TestGeneratedAlias:
    """Tests for assignment with a generated alias."""

    def test_first_attempt_succeeds(self, test_db):
        """Test a 6 character alias is bound and resolvable straight away."""
        assignment = asyncio.run(
            AliasAssigner(test_db).assign("https://example.com", "")
        )
        assert len(assignment.alias) == 6
        assert asyncio.run(LinkResolver(test_db).resolve(assignment.alias)) == (
            "https://example.com"
        )

    def test_none_alias_generates(self):
        """Test that None is treated like an empty alias."""
        store = ScriptedStore()
        assignment = asyncio.run(AliasAssigner(store).assign("https://example.com", None))
        assert len(assignment.alias) == 6

    def test_uses_configured_length(self):
        """Test candidates are generated at the configured length."""
        store = ScriptedStore()
        assignment = asyncio.run(
            AliasAssigner(store, alias_length=10).assign("https://example.com")
        )
        assert len(assignment.alias) == 10

    def test_collision_is_retried(self):
        """Test collisions are skipped until a free candidate is found."""
        store = ScriptedStore(taken=["aaaaaa", "bbbbbb"])
        generator = counting_generator(["aaaaaa", "bbbbbb", "cccccc"])
        assigner = AliasAssigner(store, generator=generator)

        assignment = asyncio.run(assigner.assign("https://example.com"))

        assert assignment.alias == "cccccc"
        assert generator.calls == 3
        assert store.saved_aliases == ["aaaaaa", "bbbbbb", "cccccc"]
        assert store.lookups == 0

    def test_exhausted_after_max_retries(self):
        """Test an always-colliding store gives up after max_retries attempts."""
        store = CollidingStore()
        generator = counting_generator(itertools.repeat("aaaaaa"))
        assigner = AliasAssigner(store, generator=generator)

        with pytest.raises(AliasSpaceExhaustedError) as exc_info:
            asyncio.run(assigner.assign("https://example.com"))

        assert exc_info.value.attempts == 5
        assert generator.calls == 5
        assert len(store.saved_aliases) == 5

    def test_exhausted_with_small_alias_space(self, test_db):
        """Test exhaustion against a real store with a one-letter alphabet."""
        asyncio.run(AliasAssigner(test_db).assign("https://a.com", "zzz"))
        assigner = AliasAssigner(
            test_db,
            alias_length=3,
            max_retries=4,
            generator=lambda length: "z" * length,
        )

        with pytest.raises(AliasSpaceExhaustedError):
            asyncio.run(assigner.assign("https://b.com"))
        assert test_db.get_url("zzz") == "https://a.com"

    def test_storage_failure_is_not_retried(self):
        """Test a non-collision failure stops the loop after one save."""
        store = BrokenStore()
        generator = counting_generator(itertools.repeat("aaaaaa"))
        assigner = AliasAssigner(store, generator=generator)

        with pytest.raises(StorageFailureError):
            asyncio.run(assigner.assign("https://example.com"))

        assert store.calls == 1
        assert generator.calls == 1

    def test_storage_failure_after_collision(self):
        """Test a failure following a collision is still a storage failure."""

        class FlakyStore(ScriptedStore):
            def save_url(self, url, alias):
                if self.saved_aliases:
                    self.saved_aliases.append(alias)
                    raise StorageError("disk I/O error")
                return super().save_url(url, alias)

        store = FlakyStore(taken=["aaaaaa"])
        assigner = AliasAssigner(
            store, generator=counting_generator(["aaaaaa", "bbbbbb", "cccccc"])
        )

        with pytest.raises(StorageFailureError):
            asyncio.run(assigner.assign("https://example.com"))
        assert store.saved_aliases == ["aaaaaa", "bbbbbb"]

    def test_each_call_binds_a_new_alias(self):
        """Test assignment is not idempotent for generated aliases."""
        store = ScriptedStore()
        assigner = AliasAssigner(store)

        first = asyncio.run(assigner.assign("https://example.com"))
        second = asyncio.run(assigner.assign("https://example.com"))

        assert first.alias != second.alias
        assert first.id != second.id


class TestCancellation:
    """Tests for stopping the retry loop when the caller goes away."""

    def test_cancel_stops_further_saves(self):
        """Test no save is issued once cancellation is reported."""
        store = CollidingStore()

        async def cancelled():
            return True

        with pytest.raises(AssignmentCancelledError):
            asyncio.run(
                AliasAssigner(store).assign("https://example.com", is_cancelled=cancelled)
            )
        assert len(store.saved_aliases) == 1

    def test_cancel_checked_between_attempts(self):
        """Test the loop runs until the cancellation check fires."""
        store = CollidingStore()
        checks = []

        async def cancelled():
            checks.append(True)
            return len(checks) >= 3

        with pytest.raises(AssignmentCancelledError):
            asyncio.run(
                AliasAssigner(store).assign("https://example.com", is_cancelled=cancelled)
            )
        assert len(store.saved_aliases) == 3

    def test_not_cancelled_runs_normally(self):
        """Test a check that never fires does not affect the result."""
        store = ScriptedStore(taken=["aaaaaa"])

        async def cancelled():
            return False

        assigner = AliasAssigner(store, generator=counting_generator(["aaaaaa", "bbbbbb"]))
        assignment = asyncio.run(
            assigner.assign("https://example.com", is_cancelled=cancelled)
        )
        assert assignment.alias == "bbbbbb"

    def test_requested_alias_ignores_cancel_check(self):
        """Test the single save for a requested alias is always attempted."""
        store = ScriptedStore()

        async def cancelled():
            raise AssertionError("must not be polled")

        assignment = asyncio.run(
            AliasAssigner(store).assign(
                "https://example.com", "mylink", is_cancelled=cancelled
            )
        )
        assert assignment.alias == "mylink"


class TestLinkResolver:
    """Tests for LinkResolver."""

    def test_resolve_existing(self):
        """Test a bound alias resolves to its URL."""
        store = ScriptedStore()
        store.save_url("https://example.com", "mylink")
        assert asyncio.run(LinkResolver(store).resolve("mylink")) == "https://example.com"

    def test_resolve_missing(self, test_db):
        """Test an alias never assigned is reported as not found."""
        with pytest.raises(LinkNotFoundError) as exc_info:
            asyncio.run(LinkResolver(test_db).resolve("missing"))
        assert exc_info.value.alias == "missing"

    def test_resolve_storage_failure(self):
        """Test a store failure is distinct from not found."""
        store = BrokenStore()
        with pytest.raises(StorageFailureError):
            asyncio.run(LinkResolver(store).resolve("mylink"))
        assert store.calls == 1

    def test_taken_alias_keeps_first_binding(self, test_db):
        """Test a rejected second assignment leaves the first URL in place."""
        assigner = AliasAssigner(test_db)
        asyncio.run(assigner.assign("https://a.com", "mylink"))

        with pytest.raises(AliasTakenError):
            asyncio.run(assigner.assign("https://b.com", "mylink"))

        assert asyncio.run(LinkResolver(test_db).resolve("mylink")) == "https://a.com"


class TestConcurrentAssignment:
    """Tests for racing assignments on one store."""

    def test_racing_requested_alias(self, test_db):
        """Test only one of many concurrent claims on an alias succeeds."""
        assigner = AliasAssigner(test_db)

        async def race():
            return await asyncio.gather(
                *(assigner.assign(f"https://example.com/{i}", "race") for i in range(20)),
                return_exceptions=True,
            )

        results = asyncio.run(race())
        successes = [r for r in results if isinstance(r, Assignment)]
        taken = [r for r in results if isinstance(r, AliasTakenError)]

        assert len(successes) == 1
        assert len(taken) == 19
        winner = results.index(successes[0])
        assert test_db.get_url("race") == f"https://example.com/{winner}"

    def test_racing_generated_aliases_are_unique(self, test_db):
        """Test concurrent generated assignments never share an alias."""
        assigner = AliasAssigner(test_db)

        async def race():
            return await asyncio.gather(
                *(assigner.assign(f"https://example.com/{i}") for i in range(30))
            )

        results = asyncio.run(race())
        aliases = [r.alias for r in results]
        assert len(set(aliases)) == 30
        for i, alias in enumerate(aliases):
            assert test_db.get_url(alias) == f"https://example.com/{i}"
