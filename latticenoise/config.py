"""
Configuration records and argument validation for noise evaluation.

All engine configuration travels as call parameters. This module gathers
those parameters into small immutable records and checks them at the call
boundary, so invalid values fail fast instead of being quietly adjusted.


Classes
-------
InvalidArgument
    Error raised for invalid configuration values.
RepeatPeriod
    Per-axis lattice wrap periods (0 disables wrapping on that axis).
OctaveSpec
    Octave count and persistence for fractal combination.
SampleRequest
    Start point, per-axis step, count and options for a batch run.


Functions
---------
checkCount(count, name)
    Validate a non-negative integer count.
checkPositiveInt(value, name)
    Validate a strictly positive integer.
checkFinite(x, y, z)
    Validate sample coordinates are finite.
"""

from dataclasses import dataclass, field
from numbers import Integral, Real
from typing import Sequence, Tuple, Union
import math
import numpy as np
from latticenoise import logger

#-----------------------------------------------------------------------------#

# Type Aliases
Triple = Tuple[float, float, float]
RepeatLike = Union[None, int, Sequence[int], 'RepeatPeriod']

# Global Variables
log = logger.addLog('config')

###############################################################################

class InvalidArgument(ValueError):
    """Raised when a configuration value is outside its valid domain."""

###############################################################################

def _fail(msg:str)->None:
    """Log the configuration failure and raise InvalidArgument."""
    log.error(msg)
    raise InvalidArgument(msg)

#------------------------------------------------------------------------------
def _isInt(value)->bool:
    return isinstance(value, Integral) and not isinstance(value, bool)

#------------------------------------------------------------------------------
def checkCount(count, name:str='count')->int:
    """Return count as int, raising InvalidArgument unless it is an int >= 0."""
    if (not _isInt(count)):
        _fail(f"{name} must be an integer, got {count!r}")
    if (count < 0):
        _fail(f"{name} must be zero or greater, got {count}")
    return int(count)

#------------------------------------------------------------------------------
def checkPositiveInt(value, name:str)->int:
    """Return value as int, raising InvalidArgument unless it is an int >= 1."""
    if (not _isInt(value)):
        _fail(f"{name} must be an integer, got {value!r}")
    if (value < 1):
        _fail(f"{name} must be at least 1, got {value}")
    return int(value)

#------------------------------------------------------------------------------
def checkFinite(x, y, z)->None:
    """Raise InvalidArgument if any sample coordinate is NaN or infinite."""
    for axis, v in (('x', x), ('y', y), ('z', z)):
        if (not np.all(np.isfinite(v))):
            _fail(f"{axis} coordinates must be finite real numbers")

#------------------------------------------------------------------------------
def _checkTriple(values, name:str)->Triple:
    """Return a 3-tuple of floats from a coordinate-like sequence."""
    try:
        items = tuple(values)
    except TypeError:
        items = ()
    if (len(items) != 3):
        _fail(f"{name} must have exactly 3 components, got {values!r}")
    for v in items:
        if ((not isinstance(v, Real)) or isinstance(v, bool)):
            _fail(f"{name} components must be real numbers, got {values!r}")
        if (not math.isfinite(v)):
            _fail(f"{name} components must be finite, got {values!r}")
    return tuple(float(v) for v in items)

###############################################################################

@dataclass(frozen=True)
class RepeatPeriod:
    """
    Per-axis repeat periods of the lattice.

    A period p > 0 on an axis wraps integer lattice coordinates modulo p on
    that axis, making the noise field tile seamlessly with period p. A period
    of 0 leaves the axis unwrapped.


    Attributes
    ----------
    x, y, z : int, default=0
        Wrap period for each axis.
    """

    x: int = 0
    y: int = 0
    z: int = 0

    def __post_init__(self)->None:
        for axis in ('x', 'y', 'z'):
            p = getattr(self, axis)
            if (not _isInt(p)):
                _fail(f"repeat period on {axis} must be an integer, got {p!r}")
            if (p < 0):
                _fail(f"repeat period on {axis} must be positive "
                      f"(or 0 to disable), got {p}")
            object.__setattr__(self, axis, int(p))

    ## Alternative Constructors ==============================================#
    @classmethod
    def of(cls, repeat:RepeatLike)->'RepeatPeriod':
        """
        Build RepeatPeriod from the forms accepted by the engine API.

        Parameters
        ----------
        repeat : None, int, sequence of 3 int, or RepeatPeriod
            None or 0 disables wrapping. A single int applies to all three
            axes. A sequence gives (x, y, z) periods.
        """

        if (repeat is None):
            return cls()
        if (isinstance(repeat, cls)):
            return repeat
        if (_isInt(repeat)):
            return cls(repeat, repeat, repeat)
        try:
            items = tuple(repeat)
        except TypeError:
            items = ()
            _fail(f"repeat must be an int or 3 ints, got {repeat!r}")
        if (len(items) != 3):
            _fail(f"repeat must have 3 components, got {repeat!r}")
        return cls(*items)

    ## Properties ============================================================#
    @property
    def active(self)->bool:
        """True if any axis wraps."""
        return bool(self.x or self.y or self.z)

    #--------------------------------------------------------------------------
    def astuple(self)->Tuple[int, int, int]:
        return (self.x, self.y, self.z)

###############################################################################

@dataclass(frozen=True)
class OctaveSpec:
    """
    Fractal combination settings.

    Octave i (starting at 0) is sampled at frequency 2^i with amplitude
    persistence^i. The weighted sum is divided by the sum of amplitudes, so
    the result stays in the single-octave range.


    Attributes
    ----------
    octaves : int, default=1
        Number of octaves to combine, at least 1.
    persistence : float, default=1.0
        Amplitude multiplier between successive octaves, greater than 0.
    """

    octaves: int = 1
    persistence: float = 1.0

    def __post_init__(self)->None:
        checkPositiveInt(self.octaves, 'octaves')
        p = self.persistence
        if ((not isinstance(p, Real)) or isinstance(p, bool)):
            _fail(f"persistence must be a real number, got {p!r}")
        if ((not math.isfinite(p)) or (p <= 0)):
            _fail(f"persistence must be a finite value greater than 0, "
                  f"got {p}")
        object.__setattr__(self, 'octaves', int(self.octaves))
        object.__setattr__(self, 'persistence', float(p))

    ## Properties ============================================================#
    @property
    def amplitudes(self)->Tuple[float, ...]:
        """Amplitude of each octave in order."""
        amps = []
        amp = 1.0
        for _ in range(self.octaves):
            amps.append(amp)
            amp *= self.persistence
        return tuple(amps)

###############################################################################

@dataclass(frozen=True)
class SampleRequest:
    """
    A batch sampling job.

    Element i of the result is the noise value at start + i * delta.


    Attributes
    ----------
    start : (float, float, float)
        First sample coordinate.
    delta : (float, float, float)
        Per-axis step between samples. Zero and negative steps are valid.
    count : int
        Number of samples, zero or more.
    repeat : RepeatPeriod
        Lattice wrap periods. Any form accepted by RepeatPeriod.of().
    octaves : OctaveSpec
        Fractal combination settings.
    """

    start: Triple
    delta: Triple
    count: int
    repeat: RepeatPeriod = field(default_factory=RepeatPeriod)
    octaves: OctaveSpec = field(default_factory=OctaveSpec)

    def __post_init__(self)->None:
        object.__setattr__(self, 'start', _checkTriple(self.start, 'start'))
        object.__setattr__(self, 'delta', _checkTriple(self.delta, 'delta'))
        object.__setattr__(self, 'count', checkCount(self.count))
        object.__setattr__(self, 'repeat', RepeatPeriod.of(self.repeat))
        if (not isinstance(self.octaves, OctaveSpec)):
            _fail(f"octaves must be an OctaveSpec, got {self.octaves!r}")
