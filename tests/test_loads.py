"""Tests for the load binding maps."""

import pytest

from simelastic.core.fields import PressureField
from simelastic.core.functions import ConstantVecFunc
from simelastic.core.loads import LoadBindingResolver


@pytest.fixture
def loads():
    return LoadBindingResolver()


class TestLoadBindingResolver:
    """Tests for LoadBindingResolver."""

    def test_bind_and_lookup(self, loads):
        body = ConstantVecFunc([0.0, 0.0, -1.0])
        pressure = PressureField(1.0)
        loads.bind_vector_field(4, body)
        loads.bind_traction(5, pressure)

        assert loads.vector_field(4) is body
        assert loads.traction(5) is pressure
        assert loads.vector_field(5) is None
        assert loads.traction(4) is None
        assert loads.has_traction(5)
        assert not loads.has_traction(4)

    def test_binding_overwrites(self, loads):
        loads.bind_traction(1, PressureField(1.0))
        second = PressureField(2.0)
        loads.bind_traction(1, second)

        assert loads.traction(1) is second
        assert loads.num_tractions == 1

    def test_vector_field_wins_over_traction(self, loads):
        vector = ConstantVecFunc([1.0, 0.0, 0.0])
        loads.bind_traction(3, PressureField(1.0))
        loads.bind_vector_field(3, vector)

        assert loads.resolve_neumann(3) is vector

    def test_traction_used_without_vector_field(self, loads):
        pressure = PressureField(1.0)
        loads.bind_traction(3, pressure)
        assert loads.resolve_neumann(3) is pressure

    def test_nothing_bound(self, loads):
        assert loads.resolve_neumann(3) is None

    def test_clear_releases_owned_entries(self, loads):
        loads.bind_vector_field(1, ConstantVecFunc([1.0]))
        loads.bind_traction(2, PressureField(1.0))

        loads.clear()

        assert loads.num_vector_fields == 0
        assert loads.num_tractions == 0

    def test_clear_refuses_borrowed_entries(self, loads):
        loads.bind_vector_field(7, ConstantVecFunc([1.0]), borrowed=True)

        with pytest.raises(RuntimeError, match="evicted"):
            loads.clear()
        assert loads.num_vector_fields == 1

    def test_evict_leaves_field_intact(self, loads):
        field = ConstantVecFunc([1.0, 2.0])
        loads.bind_vector_field(7, field, borrowed=True)

        binding = loads.evict(7)

        assert binding.field is field
        assert binding.borrowed
        assert loads.vector_field(7) is None
        assert loads.evict(7) is None
        loads.clear()

    def test_codes(self, loads):
        loads.bind_vector_field(12, ConstantVecFunc([0.0]))
        loads.bind_traction(1, PressureField(1.0))
        loads.bind_traction(2, PressureField(1.0))

        assert loads.vector_codes() == [12]
        assert loads.traction_codes() == [1, 2]
