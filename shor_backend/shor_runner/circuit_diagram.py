# shor_backend/shor_runner/circuit_diagram.py
"""
Schematic of the period-finding circuit, for display only.

The circuit is built with qiskit but never executed: U_f and the inverse
QFT are opaque blocks, so nothing here simulates a quantum state.
"""

import io

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from qiskit import ClassicalRegister, QuantumCircuit, QuantumRegister
from qiskit.circuit import Gate
from qiskit.visualization import circuit_drawer

from shor_backend.shor_runner.number_theory import register_qubits, work_register_bits


def build_period_finding_circuit(n, a=None, t=None):
    """
    Build the simplified Shor circuit for modulus n.

    Args:
        n (int): Number being factored
        a (int, optional): Base, only used for the U_f label
        t (int, optional): Counting qubits; defaults to ceil(2*log2(n))

    Returns:
        QuantumCircuit: Unexecuted schematic circuit
    """
    if t is None:
        t = register_qubits(n)
    if t < 1:
        raise ValueError("Counting register needs at least one qubit")
    n_bits = work_register_bits(n)

    counting = QuantumRegister(t, "t")
    work = QuantumRegister(n_bits, "w")
    readout = ClassicalRegister(t, "c")
    qc = QuantumCircuit(counting, work, readout, name=f"shor_{n}")

    # Superposition on the counting register, |1> on the work register
    qc.h(counting)
    qc.x(work[0])
    qc.barrier()

    label = f"{a if a is not None else 'a'}^x mod {n}"
    qc.append(Gate("U_f", t + n_bits, [], label=label), list(counting) + list(work))
    qc.barrier()

    qc.append(Gate("QFT_dg", t, [], label="QFT†"), list(counting))
    qc.measure(counting, readout)
    return qc


def circuit_summary(n, a=None, t=None):
    qc = build_period_finding_circuit(n, a=a, t=t)
    counting_qubits = qc.qregs[0].size
    return {
        "n": n,
        "a": a,
        "counting_qubits": counting_qubits,
        "work_qubits": qc.qregs[1].size,
        "register_size": 2 ** counting_qubits,
        "operations": {name: int(count) for name, count in qc.count_ops().items()},
    }


def draw_text(n, a=None, t=None):
    qc = build_period_finding_circuit(n, a=a, t=t)
    return str(qc.draw(output="text", fold=-1))


def draw_figure(n, a=None, t=None):
    """Matplotlib figure of the circuit; caller closes it."""
    qc = build_period_finding_circuit(n, a=a, t=t)
    return circuit_drawer(qc, output='mpl')


def draw_png(n, a=None, t=None):
    fig = draw_figure(n, a=a, t=t)
    buffer = io.BytesIO()
    try:
        fig.savefig(buffer, format="png", bbox_inches="tight")
    finally:
        plt.close(fig)
    return buffer.getvalue()
