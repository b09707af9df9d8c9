"""
Batched, stepped noise sampling.

Walks a start point through 3D space with a fixed per-axis step and evaluates
the noise at every position. Sample i is always computed from its absolute
index as start + i * delta, never by accumulating steps, so a batch matches
single-point evaluation bit for bit and any split of the index range gives
the same values.


Classes
-------
BatchSampler
    Runs SampleRequest jobs eagerly, lazily, or across worker threads.


Functions
---------
stepCoordinates(request, lo, hi)
    Coordinates of samples lo..hi-1 of a request.
"""

from collections.abc import Generator
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple
from numpy.typing import NDArray
import os
import numpy as np
from latticenoise.config import SampleRequest, checkPositiveInt
from latticenoise.evaluator import NoiseEvaluator
from latticenoise import logger

#-----------------------------------------------------------------------------#

# Type Aliases
NPFltArr = NDArray[np.float64]

# Default chunk length for lazy and threaded runs
CHUNK = 4096

# Global Variables
log = logger.addLog('sampler')

###############################################################################

def stepCoordinates(request:SampleRequest,
                    lo:int=0,
                    hi:Optional[int]=None,
                    )->Tuple[NPFltArr, NPFltArr, NPFltArr]:
    """
    Coordinates of samples lo through hi-1.

    Parameters
    ----------
    request : SampleRequest
        Batch job.
    lo : int, default=0
        First sample index.
    hi : int, optional
        One past the last sample index. Defaults to request.count.

    Returns
    -------
    x, y, z : ndarray
        start + i * delta per axis for each index i in [lo, hi).
    """

    if (hi is None):
        hi = request.count
    i = np.arange(lo, hi, dtype=np.int64).astype(np.float64)
    (sx, sy, sz), (dx, dy, dz) = request.start, request.delta
    return sx + i * dx, sy + i * dy, sz + i * dz

###############################################################################

class BatchSampler:
    """
    Batch noise sampler.

    Evaluates SampleRequests through a NoiseEvaluator. The request is
    validated once and the whole index range is evaluated as arrays, which
    amortizes per-call overhead across the batch.


    Parameters
    ----------
    evaluator : NoiseEvaluator
        Evaluator used for every sample.


    Examples
    --------
    >>> from latticenoise.lattice import PermutationTable
    >>> sampler = BatchSampler(NoiseEvaluator(PermutationTable(seed=3)))
    >>> req = SampleRequest(start=(0.5, 0.5, 0.0), delta=(1, 0, 0), count=3)
    >>> sampler.sample(req).shape
    (3,)
    """

    ## Constructor ===========================================================#
    def __init__(self, evaluator:NoiseEvaluator):
        self.evaluator = evaluator

    ## Special Methods =======================================================#
    def __repr__(self)->str:
        return f"{self.__class__.__name__}({self.evaluator!r})"

    ## Methods ===============================================================#
    def sample(self, request:SampleRequest)->NPFltArr:
        """
        Evaluate every sample of a request.

        Returns
        -------
        values : ndarray, shape (count,)
            Normalized noise values in [0, 1]. Empty when count is 0.
        """

        log.debug('Sampling %d points from %s step %s',
                  request.count, request.start, request.delta)
        return self._chunk(request, 0, request.count)

    #--------------------------------------------------------------------------
    def iterate(self,
                request:SampleRequest,
                chunkSize:int=CHUNK,
                )->Generator[float, None, None]:
        """
        Yield the samples of a request one at a time.

        Samples are computed chunkSize at a time, so memory stays bounded for
        very long runs. Each call starts a fresh, independent pass.

        Parameters
        ----------
        request : SampleRequest
            Batch job.
        chunkSize : int, default=4096
            Number of samples evaluated per step.
        """

        return self._iterate(request, checkPositiveInt(chunkSize, 'chunkSize'))

    #--------------------------------------------------------------------------
    def sampleParallel(self,
                       request:SampleRequest,
                       workers:Optional[int]=None,
                       chunkSize:Optional[int]=None,
                       )->NPFltArr:
        """
        Evaluate a request with the index range split across threads.

        Parameters
        ----------
        request : SampleRequest
            Batch job.
        workers : int, optional
            Thread count. Defaults to the CPU count.
        chunkSize : int, optional
            Samples per task. Defaults to an even split over the workers.

        Returns
        -------
        values : ndarray, shape (count,)
            Identical to sample(request) for every worker and chunk choice.
        """

        if (workers is None):
            workers = os.cpu_count() or 1
        workers = checkPositiveInt(workers, 'workers')
        if (chunkSize is None):
            chunkSize = max(1, -(-request.count // workers))
        chunkSize = checkPositiveInt(chunkSize, 'chunkSize')

        out = np.empty(request.count, dtype=np.float64)
        if (request.count == 0):
            return out

        bounds = self._partition(request.count, chunkSize)
        log.debug('Sampling %d points on %d threads in %d chunks',
                  request.count, workers, len(bounds))

        def work(span:Tuple[int, int])->None:
            lo, hi = span
            out[lo:hi] = self._chunk(request, lo, hi)

        with ThreadPoolExecutor(max_workers=workers) as pool:
            # list() re-raises any worker exception here
            list(pool.map(work, bounds))
        return out

    ## Helper Methods ========================================================#
    @staticmethod
    def _partition(count:int, chunkSize:int)->List[Tuple[int, int]]:
        return [(lo, min(lo + chunkSize, count))
                for lo in range(0, count, chunkSize)]

    #--------------------------------------------------------------------------
    def _iterate(self,
                 request:SampleRequest,
                 chunkSize:int,
                 )->Generator[float, None, None]:
        for lo in range(0, request.count, chunkSize):
            hi = min(lo + chunkSize, request.count)
            for value in self._chunk(request, lo, hi):
                yield float(value)

    #--------------------------------------------------------------------------
    def _chunk(self, request:SampleRequest, lo:int, hi:int)->NPFltArr:
        if (hi <= lo):
            return np.empty(0, dtype=np.float64)
        x, y, z = stepCoordinates(request, lo, hi)
        return self.evaluator.evaluate(x, y, z, request.repeat, request.octaves)
