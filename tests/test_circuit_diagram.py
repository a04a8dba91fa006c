"""
Tests for the period-finding circuit schematic.
"""
import pytest

from shor_backend.shor_runner.circuit_diagram import (
    build_period_finding_circuit,
    circuit_summary,
    draw_text,
)


class TestBuildCircuit:
    """Tests for build_period_finding_circuit."""

    def test_register_sizes_for_15(self):
        qc = build_period_finding_circuit(15, a=7)
        assert qc.num_qubits == 8 + 4
        assert qc.num_clbits == 8

    def test_operations(self):
        ops = build_period_finding_circuit(21, a=2).count_ops()
        assert ops["h"] == 9
        assert ops["x"] == 1
        assert ops["U_f"] == 1
        assert ops["QFT_dg"] == 1
        assert ops["measure"] == 9

    def test_explicit_counting_register(self):
        qc = build_period_finding_circuit(15, t=3)
        assert qc.num_clbits == 3
        assert qc.num_qubits == 3 + 4

    def test_rejects_empty_register(self):
        with pytest.raises(ValueError):
            build_period_finding_circuit(15, t=0)


class TestRendering:
    """Tests for summaries and text drawings."""

    def test_summary(self):
        summary = circuit_summary(15, a=4)
        assert summary["counting_qubits"] == 8
        assert summary["work_qubits"] == 4
        assert summary["register_size"] == 256
        assert summary["operations"]["measure"] == 8

    def test_text_drawing_labels(self):
        diagram = draw_text(15, a=4)
        assert "4^x mod 15" in diagram
        assert "QFT†" in diagram
