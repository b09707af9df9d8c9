"""
Public noise engine.

Ties the permutation table, evaluator and batch sampler together behind one
object. An Engine is built once from a seed and is immutable afterward: the
same seed always reproduces the same noise field, and one engine may be used
from any number of threads without locking.


Classes
-------
Engine
    Seeded 3D gradient noise engine.


Functions
---------
newEngine(seed, random)
    Construct an Engine.


Examples
--------
### Single samples:

>>> import latticenoise as ln
>>> eng = ln.newEngine(seed=42)
>>> v = eng.evaluate(0.5, 0.5, 0.0)            # normalized, in [0, 1]
>>> eng.evaluate(3, -7, 12)                     # lattice points: midpoint
0.5

### Fractal, tiling noise:

>>> v = eng.evaluate(1.3, 2.7, 0.4, repeat=8, octaves=5, persistence=0.5)

### Stepped batch:

>>> seq = eng.sampleSequence(0.5, 1.0, 0.5, 0.0, 0.0, 0.0, count=3)
>>> seq[1] == eng.evaluate(1.5, 0.5, 0.0)
True
"""

from collections.abc import Generator
from typing import Optional, Sequence, Union
from numpy.typing import NDArray
import numpy as np
from latticenoise.config import (InvalidArgument, OctaveSpec, RepeatPeriod,
                                 SampleRequest, checkCount)
from latticenoise.evaluator import NoiseEvaluator
from latticenoise.lattice import PermutationTable
from latticenoise.sampler import CHUNK, BatchSampler
from latticenoise import logger

#-----------------------------------------------------------------------------#

# Type Aliases
NPFltArr = NDArray[np.float64]
FltLike = Union[float, NPFltArr]
RepeatLike = Union[None, int, Sequence[int], RepeatPeriod]

# Global Variables
log = logger.addLog('engine')

###############################################################################

class Engine:
    """
    Seeded 3D gradient noise engine.

    Parameters
    ----------
    seed : int, default=0
        Seed for the permutation table, a non-negative integer. Same seed ->
        identical noise field. seed=0 is valid and not treated specially.
    random : bool, default=False
        If True, ignore seed and draw one from system entropy. The drawn
        value is stored in the seed attribute so the engine can be rebuilt.


    Attributes
    ----------
    seed : int
        Seed the table was built from.
    table : PermutationTable
        Read-only lattice hash table.
    evaluator : NoiseEvaluator
        Single-point evaluator over table.
    sampler : BatchSampler
        Batch sampler over evaluator.


    Notes
    -----
    **Options shared by evaluation methods:**

    - repeat: 0 or None disables wrapping; an int wraps all three axes with
      that period; a 3-sequence or RepeatPeriod sets per-axis periods (0 to
      leave an axis unwrapped). Negative periods raise InvalidArgument.
    - octaves: integer >= 1. Each octave doubles frequency.
    - persistence: amplitude multiplier per octave, > 0.

    Defaults (repeat=0, octaves=1, persistence=1) give plain single-octave
    noise.
    """

    ## Constructor ===========================================================#
    def __init__(self, seed:int=0, random:bool=False):
        if (random):
            seed = np.random.SeedSequence().entropy
        self.seed = checkCount(seed, 'seed')
        self.table = PermutationTable(self.seed)
        self.evaluator = NoiseEvaluator(self.table)
        self.sampler = BatchSampler(self.evaluator)
        log.debug('Engine created with seed %s', self.seed)

    ## Special Methods =======================================================#
    def __repr__(self)->str:
        """Detailed description of Engine."""
        # Table, evaluator and sampler are all rebuilt from the seed
        return f"{self.__class__.__name__}(seed={self.seed})"

    #--------------------------------------------------------------------------
    def __str__(self)->str:
        """User friendly description of Engine."""
        cw = 16
        return (
            f"Noise Engine\n"
            f"{' Seed:':{cw}} {self.seed}\n"
            f"{' Table size:':{cw}} {len(self.table)}\n"
        )

    #--------------------------------------------------------------------------
    def __call__(self,
                 x:FltLike,
                 y:FltLike,
                 z:FltLike,
                 **kwargs,
                 )->FltLike:
        """Shorthand for evaluate()."""
        return self.evaluate(x, y, z, **kwargs)

    ## Methods ===============================================================#
    def evaluate(self,
                 x:FltLike,
                 y:FltLike,
                 z:FltLike,
                 repeat:RepeatLike=0,
                 octaves:int=1,
                 persistence:float=1.0,
                 )->FltLike:
        """
        Normalized noise at a point.

        Parameters
        ----------
        x, y, z : float or ndarray
            Sample coordinates. Arrays broadcast and give an array result.
        repeat : int, sequence of 3 int, or RepeatPeriod, default=0
            Lattice wrap periods.
        octaves : int, default=1
            Octave count.
        persistence : float, default=1.0
            Amplitude decay between octaves.

        Returns
        -------
        noise : float or ndarray
            Value in [0, 1]. Integer-aligned coordinates give 0.5.

        Raises
        ------
        InvalidArgument
            For non-finite coordinates, or invalid repeat, octaves or
            persistence.
        """

        return self.evaluator.evaluate(x, y, z, RepeatPeriod.of(repeat),
                                       OctaveSpec(octaves, persistence))

    #--------------------------------------------------------------------------
    def raw(self,
            x:FltLike,
            y:FltLike,
            z:FltLike,
            repeat:RepeatLike=0,
            )->FltLike:
        """
        Single-octave raw noise in [-1, 1].

        Integer-aligned coordinates give 0.0. evaluate() with default options
        equals (raw() + 1) / 2.
        """

        return self.evaluator.raw(x, y, z, RepeatPeriod.of(repeat))

    #--------------------------------------------------------------------------
    def sampleSequence(self,
                       startX:float,
                       deltaX:float,
                       startY:float,
                       deltaY:float,
                       startZ:float,
                       deltaZ:float,
                       count:int,
                       repeat:RepeatLike=0,
                       octaves:int=1,
                       persistence:float=1.0,
                       )->NPFltArr:
        """
        Noise along a stepped path.

        Parameters
        ----------
        startX, startY, startZ : float
            First sample coordinate.
        deltaX, deltaY, deltaZ : float
            Step per sample on each axis. Zero or negative allowed.
        count : int
            Number of samples, zero or more.
        repeat, octaves, persistence
            As in evaluate().

        Returns
        -------
        values : ndarray, shape (count,)
            values[i] == evaluate(start + i * delta, ...) exactly.

        Raises
        ------
        InvalidArgument
            For negative count or invalid options.
        """

        return self.sampler.sample(self._request(
            startX, deltaX, startY, deltaY, startZ, deltaZ,
            count, repeat, octaves, persistence))

    #--------------------------------------------------------------------------
    def iterSequence(self,
                     startX:float,
                     deltaX:float,
                     startY:float,
                     deltaY:float,
                     startZ:float,
                     deltaZ:float,
                     count:int,
                     repeat:RepeatLike=0,
                     octaves:int=1,
                     persistence:float=1.0,
                     chunkSize:int=CHUNK,
                     )->Generator[float, None, None]:
        """
        Lazy form of sampleSequence().

        Arguments are validated immediately; samples are produced on
        iteration, chunkSize at a time.
        """

        request = self._request(startX, deltaX, startY, deltaY, startZ, deltaZ,
                                count, repeat, octaves, persistence)
        return self.sampler.iterate(request, chunkSize)

    #--------------------------------------------------------------------------
    def sampleSequenceParallel(self,
                               startX:float,
                               deltaX:float,
                               startY:float,
                               deltaY:float,
                               startZ:float,
                               deltaZ:float,
                               count:int,
                               repeat:RepeatLike=0,
                               octaves:int=1,
                               persistence:float=1.0,
                               workers:Optional[int]=None,
                               chunkSize:Optional[int]=None,
                               )->NPFltArr:
        """
        sampleSequence() with the index range split across threads.

        The result does not depend on workers or chunkSize.
        """

        request = self._request(startX, deltaX, startY, deltaY, startZ, deltaZ,
                                count, repeat, octaves, persistence)
        return self.sampler.sampleParallel(request, workers, chunkSize)

    #--------------------------------------------------------------------------
    def sample(self, request:SampleRequest)->NPFltArr:
        """Run a prepared SampleRequest. Same result as sampleSequence()."""
        if (not isinstance(request, SampleRequest)):
            msg = f"expected a SampleRequest, got {type(request).__name__}"
            log.error(msg)
            raise InvalidArgument(msg)
        return self.sampler.sample(request)

    ## Helper Methods ========================================================#
    @staticmethod
    def _request(startX:float, deltaX:float,
                 startY:float, deltaY:float,
                 startZ:float, deltaZ:float,
                 count:int,
                 repeat:RepeatLike,
                 octaves:int,
                 persistence:float,
                 )->SampleRequest:
        return SampleRequest(start=(startX, startY, startZ),
                             delta=(deltaX, deltaY, deltaZ),
                             count=count,
                             repeat=RepeatPeriod.of(repeat),
                             octaves=OctaveSpec(octaves, persistence))

###############################################################################

def newEngine(seed:int=0, random:bool=False)->Engine:
    """
    Construct a noise engine.

    Parameters
    ----------
    seed : int, default=0
        Permutation table seed. Same seed -> same noise field.
    random : bool, default=False
        Draw the seed from system entropy instead.

    Returns
    -------
    engine : Engine
        Ready-to-use engine.
    """

    return Engine(seed=seed, random=random)
