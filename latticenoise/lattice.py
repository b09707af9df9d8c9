"""
Lattice hashing and gradient selection for 3D gradient noise.

Assigns a pseudo-random gradient direction to every integer lattice point in
3D space. Lattice coordinates are optionally wrapped by a repeat period and
then hashed through a seeded permutation table. All functions accept numpy
integer arrays as well as plain integers.


Classes
-------
PermutationTable
    Immutable seeded shuffle of [0, 255], doubled to 512 entries.


Functions
---------
wrap(i, period)
    Reduce lattice coordinates modulo a repeat period.
gradient(h, x, y, z)
    Dot product of the hashed gradient with an offset vector.


Notes
-----
**Gradient Set:**

The twelve edge directions of a cube are used, selected by the low four bits
of the hash. The sixteen slots repeat four directions, which keeps selection
a bit mask instead of a modulo by 12:

.. code-block:: none

    h & 15 :  0 ( 1, 1, 0)   1 (-1, 1, 0)   2 ( 1,-1, 0)   3 (-1,-1, 0)
              4 ( 1, 0, 1)   5 (-1, 0, 1)   6 ( 1, 0,-1)   7 (-1, 0,-1)
              8 ( 0, 1, 1)   9 ( 0,-1, 1)  10 ( 0, 1,-1)  11 ( 0,-1,-1)
             12 ( 1, 1, 0)  13 (-1, 1, 0)  14 ( 0,-1, 1)  15 ( 0,-1,-1)


References
----------
[1] Perlin, K. (2002). "Improving Noise." ACM SIGGRAPH 2002.

[2] Adrian's Blog: Perlin Noise Explanation
https://adrianb.io/2014/08/09/perlinnoise.html
"""

from typing import Optional, Union
from numpy.typing import NDArray
import numpy as np
from latticenoise import logger

#-----------------------------------------------------------------------------#

# Type Aliases
NPFltArr = NDArray[np.float64]
NPIntArr = NDArray[np.int_]
IntLike = Union[int, NPIntArr]
FltLike = Union[float, NPFltArr]

# Table geometry
TABLE_SIZE = 256
MASK = TABLE_SIZE - 1

# Gradient directions indexed by (h & 15)
GRADIENTS = np.array([
    [ 1,  1,  0], [-1,  1,  0], [ 1, -1,  0], [-1, -1,  0],
    [ 1,  0,  1], [-1,  0,  1], [ 1,  0, -1], [-1,  0, -1],
    [ 0,  1,  1], [ 0, -1,  1], [ 0,  1, -1], [ 0, -1, -1],
    [ 1,  1,  0], [-1,  1,  0], [ 0, -1,  1], [ 0, -1, -1],
], dtype=np.float64)
GRADIENTS.setflags(write=False)

# Global Variables
log = logger.addLog('lattice')

###############################################################################

def wrap(i:IntLike, period:int)->IntLike:
    """
    Reduce lattice coordinate(s) modulo a repeat period.

    Parameters
    ----------
    i : int or ndarray of int
        Lattice coordinate(s), may be negative.
    period : int
        Repeat period. 0 leaves the coordinate unchanged.

    Returns
    -------
    wrapped : int or ndarray of int
        Coordinate(s) in [0, period) when period > 0.

    Notes
    -----
    Both Python and numpy take the sign of the divisor for %, so negative
    coordinates land in [0, period) as well.
    """

    if (period):
        return i % period
    return i

###############################################################################

def gradient(h:IntLike, x:FltLike, y:FltLike, z:FltLike)->FltLike:
    """
    Select gradient from hash and dot it with an offset vector.

    Parameters
    ----------
    h : int or ndarray of int
        Hash value(s) from PermutationTable.hash().
    x, y, z : float or ndarray
        Offset from the lattice corner to the sample point.

    Returns
    -------
    dot : float or ndarray
        g . (x, y, z) for the selected gradient g.
    """

    g = GRADIENTS[np.asarray(h) & 15]
    return (g[..., 0] * x) + (g[..., 1] * y) + (g[..., 2] * z)

###############################################################################

class PermutationTable:
    """
    Immutable permutation table for lattice hashing.

    Holds a seeded shuffle of the integers [0, 255], repeated twice so nested
    lookups p[p[p[x] + y] + z] never index past the end. The table is built
    once in the constructor and flagged read-only, so one instance can be
    shared by any number of threads without locking.


    Parameters
    ----------
    seed : int, default=0
        Seed for numpy.random.default_rng. Same seed gives the same table.


    Attributes
    ----------
    seed : int
        Seed used to build the table.
    p : ndarray, shape (512,), dtype=int
        Read-only permutation table.


    Examples
    --------
    >>> table = PermutationTable(seed=7)
    >>> h = table.hash(3, -2, 10)
    >>> 0 <= h < 256
    True
    """

    ## Constructor ===========================================================#
    def __init__(self, seed:int=0):
        self.seed = seed
        rng = np.random.default_rng(seed=seed)
        p = np.arange(TABLE_SIZE, dtype=np.int_)
        rng.shuffle(p)
        p = np.concatenate([p, p])
        p.setflags(write=False)
        self._p = p
        log.debug('Permutation table built for seed %s', seed)

    ## Properties ============================================================#
    @property
    def p(self)->NPIntArr:
        """The read-only 512-entry table."""
        return self._p

    ## Special Methods =======================================================#
    def __len__(self)->int:
        return len(self._p)

    #--------------------------------------------------------------------------
    def __getitem__(self, index:IntLike)->IntLike:
        return self._p[index]

    #--------------------------------------------------------------------------
    def __repr__(self)->str:
        return f"{self.__class__.__name__}(seed={self.seed})"

    #--------------------------------------------------------------------------
    def __eq__(self, other)->bool:
        if (not isinstance(other, PermutationTable)):
            return NotImplemented
        return bool(np.array_equal(self._p, other._p))

    __hash__ = None

    ## Methods ===============================================================#
    def hash(self,
             xi:IntLike,
             yi:IntLike,
             zi:IntLike,
             )->IntLike:
        """
        Hash lattice coordinates to a table value in [0, 255].

        Parameters
        ----------
        xi, yi, zi : int or ndarray of int
            Lattice coordinates, already wrapped if repetition is active. Any
            integer is accepted; each axis is masked to [0, 255] first.

        Returns
        -------
        h : int or ndarray of int
            Table value used by gradient() to pick a direction.
        """

        p = self._p
        return p[p[p[xi & MASK] + (yi & MASK)] + (zi & MASK)]

    #--------------------------------------------------------------------------
    def corner(self,
               xi:IntLike,
               yi:IntLike,
               zi:IntLike,
               x:FltLike,
               y:FltLike,
               z:FltLike,
               period:Optional[tuple]=None,
               )->FltLike:
        """
        Gradient contribution of one lattice corner.

        Parameters
        ----------
        xi, yi, zi : int or ndarray of int
            Corner lattice coordinates before wrapping.
        x, y, z : float or ndarray
            Offset from the corner to the sample point.
        period : (int, int, int), optional
            Repeat periods per axis; 0 or None leaves an axis unwrapped.

        Returns
        -------
        dot : float or ndarray
            Dot product of the corner gradient with the offset.
        """

        if (period is not None):
            xi = wrap(xi, period[0])
            yi = wrap(yi, period[1])
            zi = wrap(zi, period[2])
        return gradient(self.hash(xi, yi, zi), x, y, z)
