"""
Single-point 3D gradient noise evaluation.

Computes improved Perlin noise at arbitrary real coordinates using a
PermutationTable for gradient assignment. Supports lattice repetition (seamless
tiling along any axis) and multi-octave fractal combination. Every function
accepts scalar coordinates or numpy arrays of any broadcastable shape.


Classes
-------
NoiseEvaluator
    Gradient noise evaluator bound to one permutation table.


Functions
---------
fade(t)
    Quintic smoothing curve 6t^5 - 15t^4 + 10t^3.
lerp(a, b, t)
    Linear interpolation a + t(b - a).
normalize(v)
    Map raw noise from [-1, 1] to [0, 1].


Notes
-----
**Output Ranges:**

- raw(): single octave, in [-1, 1]
- fractal(): weighted mean of octaves, in [-1, 1]
- evaluate(): fractal() rescaled by (v + 1) / 2, in [0, 1]

**Lattice Points:**

At integer coordinates the offset to the owning corner is the zero vector and
every fade weight is 0, so the result is that corner's dot product, which is
always 0. Every integer-aligned coordinate therefore evaluates to the center
of the output range (raw 0.0, normalized 0.5), in every cell and for every
octave count.

**Arithmetic:**

The fade curve and interpolation use only elementwise multiply and add, so a
coordinate gives the same bits whether it is evaluated alone or as one
element of an array.
"""

from typing import Optional, Union
from numpy.typing import NDArray
import numpy as np
from latticenoise.config import OctaveSpec, RepeatPeriod, checkFinite
from latticenoise.lattice import TABLE_SIZE, PermutationTable

#-----------------------------------------------------------------------------#

# Type Aliases
NPFltArr = NDArray[np.float64]
FltLike = Union[float, NPFltArr]

###############################################################################

def fade(t:FltLike)->FltLike:
    """
    Quintic fade curve for interpolation weights.

    f(t) = 6t^5 - 15t^4 + 10t^3, with f(0) = 0, f(1) = 1 and zero first and
    second derivatives at both ends, which makes the noise C^2 continuous
    across cell boundaries.
    """

    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)

#------------------------------------------------------------------------------
def lerp(a:FltLike, b:FltLike, t:FltLike)->FltLike:
    """Linear interpolation, returns a exactly when t is 0."""
    return a + t * (b - a)

#------------------------------------------------------------------------------
def normalize(v:FltLike)->FltLike:
    """Rescale raw noise from [-1, 1] to [0, 1]."""
    return (v + 1.0) / 2.0

#------------------------------------------------------------------------------
def _result(v:NPFltArr)->FltLike:
    """Return Python float for 0-d results, arrays otherwise."""
    if (np.ndim(v) == 0):
        return float(v)
    return v

#------------------------------------------------------------------------------
def _cell(f:NPFltArr, period:int)->NDArray[np.int64]:
    """
    Integer lattice cell from a floored coordinate.

    The reduction modulo the period (or the table size on unwrapped axes) is
    done in float space, where it is exact, so any finite coordinate maps to
    a small int64 and hashes as its unreduced cell would.
    """

    return np.mod(f, period or TABLE_SIZE).astype(np.int64)

###############################################################################

class NoiseEvaluator:
    """
    3D gradient noise evaluator.

    Stateless apart from the shared, read-only permutation table, so a single
    evaluator may be used from many threads at once.


    Parameters
    ----------
    table : PermutationTable
        Lattice hash table. Determines the noise field.


    Attributes
    ----------
    table : PermutationTable
        The table given at construction.


    Examples
    --------
    >>> ev = NoiseEvaluator(PermutationTable(seed=1))
    >>> ev.raw(2.0, -5.0, 11.0)
    0.0
    >>> 0.0 <= ev.evaluate(0.3, 0.7, 1.9, octaves=OctaveSpec(4, 0.5)) <= 1.0
    True
    """

    ## Constructor ===========================================================#
    def __init__(self, table:PermutationTable):
        self.table = table

    ## Special Methods =======================================================#
    def __repr__(self)->str:
        return f"{self.__class__.__name__}({self.table!r})"

    ## Methods ===============================================================#
    def raw(self,
            x:FltLike,
            y:FltLike,
            z:FltLike,
            repeat:Optional[RepeatPeriod]=None,
            )->FltLike:
        """
        Single-octave gradient noise in [-1, 1].

        Parameters
        ----------
        x, y, z : float or ndarray
            Sample coordinates. Arrays are broadcast together.
        repeat : RepeatPeriod, optional
            Lattice wrap periods. None disables wrapping.

        Returns
        -------
        noise : float or ndarray
            Raw noise, float for scalar input and ndarray otherwise.

        Notes
        -----
        **Algorithm Steps:**

        1. Split each coordinate into lattice cell (floor) and offset in [0, 1)
        2. Fade the offsets
        3. Hash the 8 cell corners (after wrapping) and dot each gradient with
           the corner-to-point vector
        4. Interpolate along x, then y, then z

        The result is clipped to [-1, 1]; the theoretical extremes of 3D
        improved noise sit marginally outside that interval.
        NaN or infinite coordinates raise InvalidArgument.
        """

        return _result(self._raw(x, y, z, self._period(repeat)))

    #--------------------------------------------------------------------------
    def fractal(self,
                x:FltLike,
                y:FltLike,
                z:FltLike,
                repeat:Optional[RepeatPeriod]=None,
                octaves:Optional[OctaveSpec]=None,
                )->FltLike:
        """
        Multi-octave noise in [-1, 1].

        Parameters
        ----------
        x, y, z : float or ndarray
            Sample coordinates.
        repeat : RepeatPeriod, optional
            Lattice wrap periods, applied at every octave.
        octaves : OctaveSpec, optional
            Octave count and persistence. Default is a single octave.

        Returns
        -------
        noise : float or ndarray
            sum(amp_i * raw(2^i * coord)) / sum(amp_i)

        Notes
        -----
        Dividing by the amplitude sum keeps the result within the raw range
        for any octave count and persistence. With one octave the result is
        identical to raw().
        """

        return _result(self._fractal(x, y, z, self._period(repeat),
                                     octaves or OctaveSpec()))

    #--------------------------------------------------------------------------
    def evaluate(self,
                 x:FltLike,
                 y:FltLike,
                 z:FltLike,
                 repeat:Optional[RepeatPeriod]=None,
                 octaves:Optional[OctaveSpec]=None,
                 )->FltLike:
        """
        Normalized noise in [0, 1].

        Same parameters as fractal(); the result is rescaled with
        normalize(). Integer-aligned coordinates return exactly 0.5.
        """

        return _result(normalize(self._fractal(x, y, z, self._period(repeat),
                                               octaves or OctaveSpec())))

    ## Helper Methods ========================================================#
    @staticmethod
    def _period(repeat:Optional[RepeatPeriod])->Optional[tuple]:
        if ((repeat is None) or (not repeat.active)):
            return None
        return repeat.astuple()

    #--------------------------------------------------------------------------
    def _fractal(self,
                 x:FltLike,
                 y:FltLike,
                 z:FltLike,
                 period:Optional[tuple],
                 octaves:OctaveSpec,
                 )->NPFltArr:
        """Amplitude-weighted mean of octaves. Shared by scalar and batch."""

        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        z = np.asarray(z, dtype=np.float64)

        total = 0.0
        ampSum = 0.0
        freq = 1.0
        for amp in octaves.amplitudes:
            total = total + amp * self._raw(x * freq, y * freq, z * freq,
                                            period)
            ampSum += amp
            freq *= 2.0
        return total / ampSum

    #--------------------------------------------------------------------------
    def _raw(self,
             x:FltLike,
             y:FltLike,
             z:FltLike,
             period:Optional[tuple],
             )->NPFltArr:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        z = np.asarray(z, dtype=np.float64)
        checkFinite(x, y, z)
        px, py, pz = period or (0, 0, 0)

        # Lattice cell and offset within it
        fx, fy, fz = np.floor(x), np.floor(y), np.floor(z)
        xi, yi, zi = _cell(fx, px), _cell(fy, py), _cell(fz, pz)
        xf, yf, zf = x - fx, y - fy, z - fz
        u, v, w = fade(xf), fade(yf), fade(zf)

        # Corner contributions
        c = self.table.corner
        n000 = c(xi,     yi,     zi,     xf,       yf,       zf,       period)
        n100 = c(xi + 1, yi,     zi,     xf - 1.0, yf,       zf,       period)
        n010 = c(xi,     yi + 1, zi,     xf,       yf - 1.0, zf,       period)
        n110 = c(xi + 1, yi + 1, zi,     xf - 1.0, yf - 1.0, zf,       period)
        n001 = c(xi,     yi,     zi + 1, xf,       yf,       zf - 1.0, period)
        n101 = c(xi + 1, yi,     zi + 1, xf - 1.0, yf,       zf - 1.0, period)
        n011 = c(xi,     yi + 1, zi + 1, xf,       yf - 1.0, zf - 1.0, period)
        n111 = c(xi + 1, yi + 1, zi + 1, xf - 1.0, yf - 1.0, zf - 1.0, period)

        # Interpolate x, then y, then z
        x00 = lerp(n000, n100, u)
        x10 = lerp(n010, n110, u)
        x01 = lerp(n001, n101, u)
        x11 = lerp(n011, n111, u)
        y0 = lerp(x00, x10, v)
        y1 = lerp(x01, x11, v)
        return np.clip(lerp(y0, y1, w), -1.0, 1.0)
