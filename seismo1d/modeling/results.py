"""
Simulation results and their persistence.

A run produces one pressure trace per receiver together with the metadata
needed to interpret it. Results are stored either as a MATLAB record
(``Seismogramm``, ``dt``, ``T``, ``time``, ``dx``), readable by the usual
seismic processing scripts, or as a compressed NumPy archive holding every
field.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple, Union

import numpy as np
from pydantic import BaseModel, ConfigDict
from scipy.io import loadmat, savemat


class SimulationResult(BaseModel):
    """
    Output of a finite-difference run.

    Attributes:
        seismogram (np.ndarray): Pressure traces, shape ``(n_receivers, nt)``.
        dt (float): Time step (s).
        dx (float): Grid spacing (m).
        total_time (float): Total propagation time (s).
        elapsed_time (float): Wall-clock time spent time stepping (s).
        nt (int): Number of time samples.
        source_index (int): Source grid index.
        receiver_indices (Tuple[int, ...]): Receiver grid indices.
        time_vector (np.ndarray): Sample times (s).
        x (np.ndarray): Grid coordinates (m).
        source_wavelet (np.ndarray, optional): Source-time function.
        pressure (np.ndarray, optional): Final pressure field.
        velocity (np.ndarray, optional): Final particle velocity field.
        wavefields (np.ndarray, optional): Stored pressure snapshots, shape ``(n_snapshots, nx)``.
        snapshot_steps (List[int]): Time step index of each stored snapshot.
    """
    seismogram: np.ndarray
    dt: float
    dx: float
    total_time: float
    elapsed_time: float
    nt: int
    source_index: int
    receiver_indices: Tuple[int, ...]
    time_vector: np.ndarray
    x: np.ndarray
    source_wavelet: Optional[np.ndarray] = None
    pressure: Optional[np.ndarray] = None
    velocity: Optional[np.ndarray] = None
    wavefields: Optional[np.ndarray] = None
    snapshot_steps: List[int] = []

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def n_receivers(self) -> int:
        return int(self.seismogram.shape[0])
    # end def n_receivers

    @property
    def receiver_positions(self) -> np.ndarray:
        """Receiver positions in metres."""
        return np.asarray(self.receiver_indices, dtype=np.float64) * self.dx
    # end def receiver_positions

    @property
    def source_position(self) -> float:
        return self.source_index * self.dx
    # end def source_position

    def trace(self, receiver: int) -> np.ndarray:
        """Pressure trace recorded by receiver number ``receiver``."""
        return self.seismogram[receiver]
    # end def trace

    def save(self, path: Union[str, Path], format: str = "mat") -> Path:
        """
        Save the result to a file.

        Args:
            path: Path where the file will be saved.
            format: ``"mat"`` for a MATLAB record or ``"numpy"`` for a compressed archive.

        Returns:
            Path: The written file.

        Raises:
            ValueError: If the format is not supported.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        if format == "mat":
            savemat(
                str(path),
                {
                    "Seismogramm": self.seismogram,
                    "dt": self.dt,
                    "T": self.total_time,
                    "time": self.elapsed_time,
                    "dx": self.dx,
                    "source_index": self.source_index,
                    "receiver_indices": np.asarray(self.receiver_indices, dtype=np.int64),
                },
            )
        elif format == "numpy":
            arrays = {
                "seismogram": self.seismogram,
                "dt": self.dt,
                "dx": self.dx,
                "total_time": self.total_time,
                "elapsed_time": self.elapsed_time,
                "nt": self.nt,
                "source_index": self.source_index,
                "receiver_indices": np.asarray(self.receiver_indices, dtype=np.int64),
                "time_vector": self.time_vector,
                "x": self.x,
                "snapshot_steps": np.asarray(self.snapshot_steps, dtype=np.int64),
            }
            for name in ("source_wavelet", "pressure", "velocity", "wavefields"):
                value = getattr(self, name)
                if value is not None:
                    arrays[name] = value
                # end if
            # end for
            with open(path, "wb") as f:
                np.savez_compressed(f, **arrays)
            # end with
        else:
            raise ValueError(f"Unsupported format: {format}")
        # end if

        return path
    # end def save

    def __str__(self) -> str:
        return (
            f"SimulationResult(receivers={self.n_receivers}, nt={self.nt}, "
            f"dt={self.dt:.6g}, dx={self.dx:.6g}, elapsed={self.elapsed_time:.3f}s)"
        )
    # end def __str__

# end class SimulationResult


def _load_mat(path: Path) -> SimulationResult:
    data = loadmat(str(path))
    seismogram = np.asarray(data["Seismogramm"], dtype=np.float64)
    if seismogram.ndim == 1:
        seismogram = seismogram.reshape(1, -1)
    # end if
    dt = float(np.squeeze(data["dt"]))
    dx = float(np.squeeze(data["dx"]))
    nt = int(seismogram.shape[1])
    receivers = np.atleast_1d(np.squeeze(data.get("receiver_indices", np.zeros(seismogram.shape[0]))))
    return SimulationResult(
        seismogram=seismogram,
        dt=dt,
        dx=dx,
        total_time=float(np.squeeze(data["T"])),
        elapsed_time=float(np.squeeze(data["time"])),
        nt=nt,
        source_index=int(np.squeeze(data.get("source_index", 0))),
        receiver_indices=tuple(int(r) for r in receivers),
        time_vector=np.arange(nt, dtype=np.float64) * dt,
        x=np.empty(0, dtype=np.float64),
    )
# end def _load_mat


def _load_numpy(path: Path) -> SimulationResult:
    with np.load(path, allow_pickle=False) as data:
        optional = {
            name: np.array(data[name])
            for name in ("source_wavelet", "pressure", "velocity", "wavefields")
            if name in data.files
        }
        return SimulationResult(
            seismogram=np.array(data["seismogram"]),
            dt=float(data["dt"]),
            dx=float(data["dx"]),
            total_time=float(data["total_time"]),
            elapsed_time=float(data["elapsed_time"]),
            nt=int(data["nt"]),
            source_index=int(data["source_index"]),
            receiver_indices=tuple(int(r) for r in data["receiver_indices"]),
            time_vector=np.array(data["time_vector"]),
            x=np.array(data["x"]),
            snapshot_steps=[int(s) for s in data["snapshot_steps"]],
            **optional,
        )
    # end with
# end def _load_numpy


def load_result(path: Union[str, Path]) -> SimulationResult:
    """
    Load a result written by ``SimulationResult.save``.

    The format is inferred from the file extension (``.mat`` or ``.npz``).

    Args:
        path: Path to the result file.

    Returns:
        SimulationResult: The loaded result. Records read from ``.mat`` files do
        not carry the grid coordinates or the wavefields.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the extension is not recognised.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Result file not found: {path}")
    # end if

    if path.suffix == ".mat":
        return _load_mat(path)
    elif path.suffix == ".npz":
        return _load_numpy(path)
    # end if
    raise ValueError(f"Unsupported result file extension: {path.suffix}")
# end def load_result
