"""
Tests for the projection name registry and projection equality.
"""

import threading

import pytest

from cartoproj.core.projections import (
    GeographicProjection,
    HRAPProjection,
    ProjectionRegistry,
    UnknownProjection,
    UTMProjection,
    need_to_project,
    projection_registry,
    projections_equal,
)


class TestProjectionRegistry:
    """Tests for ProjectionRegistry."""

    def test_first_id_is_zero(self) -> None:
        """Test that ids start at 0 and increase by one."""
        registry = ProjectionRegistry()
        assert registry.register("Geographic") == 0
        assert registry.register("HRAP") == 1
        assert registry.register("UTM") == 2
        assert len(registry) == 3

    def test_register_is_case_insensitive(self) -> None:
        """Test that names differing only in case share an id."""
        registry = ProjectionRegistry()
        first = registry.register("UTM")
        assert registry.register("utm") == first
        assert registry.register("Utm") == first
        assert registry.names() == ["UTM"]

    def test_lookup(self) -> None:
        """Test lookup of registered and unregistered names."""
        registry = ProjectionRegistry()
        registry.register("HRAP")
        assert registry.lookup("hrap") == 0
        assert registry.lookup("Geographic") is None
        assert "HRAP" in registry
        assert "Geographic" not in registry
        assert 5 not in registry

    def test_names_returns_copy(self) -> None:
        """Test that names() cannot be used to modify the registry."""
        registry = ProjectionRegistry()
        registry.register("Geographic")
        names = registry.names()
        names.append("Bogus")
        assert registry.names() == ["Geographic"]

    def test_projection_ids_shared_by_name(self) -> None:
        """Test that two projections with one name get the same id."""
        registry = ProjectionRegistry()
        a = UTMProjection(13, registry=registry)
        b = UTMProjection(14, registry=registry)
        h = HRAPProjection(registry=registry)
        assert a.id == b.id == 0
        assert h.id == 1

    def test_default_registry_used(self) -> None:
        """Test that projections register in the process-wide registry by default."""
        projection = GeographicProjection()
        assert projection_registry.lookup("Geographic") == projection.id

    def test_concurrent_registration(self) -> None:
        """Test that concurrent registration assigns one id per name."""
        registry = ProjectionRegistry()
        names = [f"Projection{i % 10}" for i in range(200)]
        results = {}
        lock = threading.Lock()

        def worker(name: str) -> None:
            projection_id = registry.register(name)
            with lock:
                results.setdefault(name, set()).add(projection_id)

        threads = [threading.Thread(target=worker, args=(name,)) for name in names]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(registry) == 10
        assert all(len(ids) == 1 for ids in results.values())
        assert sorted(next(iter(ids)) for ids in results.values()) == list(range(10))


class TestProjectionEquality:
    """Tests for projection equality and need_to_project()."""

    def test_equal_utm(self) -> None:
        """Test that UTM projections with the same zone and datum are equal."""
        assert UTMProjection(13) == UTMProjection(13)
        assert projections_equal(UTMProjection(13), UTMProjection(13))
        assert hash(UTMProjection(13)) == hash(UTMProjection(13))

    def test_different_zone_not_equal(self) -> None:
        """Test that the zone participates in equality."""
        assert UTMProjection(13) != UTMProjection(14)

    def test_different_datum_not_equal(self) -> None:
        """Test that the datum participates in equality."""
        assert UTMProjection(13, datum="NAD27") != UTMProjection(13, datum="NAD83")

    def test_projections_equal_none(self) -> None:
        """Test that a missing projection is never equal."""
        assert projections_equal(None, GeographicProjection()) is False
        assert projections_equal(GeographicProjection(), None) is False

    def test_equality_with_other_types(self) -> None:
        """Test that comparing with a non-projection is not equal."""
        assert GeographicProjection() != "Geographic"

    def test_need_to_project_same(self) -> None:
        """Test that a projection never needs projecting to itself."""
        for projection in (GeographicProjection(), HRAPProjection(), UTMProjection(13)):
            assert need_to_project(projection, projection) is False

    def test_need_to_project_equal_instances(self) -> None:
        """Test that equal but distinct instances do not need projecting."""
        assert need_to_project(UTMProjection(13), UTMProjection(13)) is False

    def test_need_to_project_different_names(self) -> None:
        """Test that different names need projecting even with equal zones."""
        geographic = GeographicProjection()
        hrap = HRAPProjection()
        assert geographic.zone == hrap.zone == 0
        assert need_to_project(geographic, hrap) is True
        assert need_to_project(GeographicProjection(), UTMProjection(13)) is True

    def test_need_to_project_unknown(self) -> None:
        """Test that Unknown never needs projecting in either direction."""
        unknown = UnknownProjection()
        assert need_to_project(unknown, UTMProjection(13)) is False
        assert need_to_project(HRAPProjection(), unknown) is False

    def test_need_to_project_none(self) -> None:
        """Test that a missing projection never needs projecting."""
        assert need_to_project(None, HRAPProjection()) is False
        assert need_to_project(HRAPProjection(), None) is False

    @pytest.mark.unit
    def test_str_and_repr(self) -> None:
        """Test string representations."""
        projection = UTMProjection(13)
        assert str(projection) == "UTM"
        assert "zone=13" in repr(projection)
        assert "NAD83" in repr(projection)
        assert "Geographic" in repr(GeographicProjection())
