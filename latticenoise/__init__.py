"""
latticenoise: Deterministic 3D Gradient Noise

Seeded, reproducible improved Perlin noise in three dimensions, with lattice
repetition for seamless tiling, multi-octave fractal combination, and stepped
batch sampling.

Modules
-------
engine : Public Engine class and newEngine constructor
evaluator : Single-point noise evaluation
sampler : Stepped batch sampling
lattice : Permutation table and gradient hashing
config : Configuration records and validation
logger : Logging configuration and utilities

Examples
--------
### Basic sampling:

>>> import latticenoise as ln
>>>
>>> eng = ln.newEngine(seed=1234)
>>> height = eng.evaluate(12.3, 4.56, 0.0, octaves=4, persistence=0.5)

### Stepped path through a tiling field:

>>> wind = eng.sampleSequence(
...     startX=0.0, deltaX=0.05,
...     startY=3.5, deltaY=0.0,
...     startZ=0.0, deltaZ=0.01,
...     count=1000,
...     repeat=16,
... )
"""

# Core modules - import for direct access
from . import config
from . import engine
from . import evaluator
from . import lattice
from . import logger
from . import sampler

# Classes and functions for convenience
from .config import InvalidArgument, OctaveSpec, RepeatPeriod, SampleRequest
from .engine import Engine, newEngine

# Version info
__version__ = "0.1.0"

# Define what gets imported with "from latticenoise import *"
__all__ = [
    # Modules
    'config',
    'engine',
    'evaluator',
    'lattice',
    'logger',
    'sampler',
    # Main classes
    'Engine',
    'newEngine',
    'InvalidArgument',
    'OctaveSpec',
    'RepeatPeriod',
    'SampleRequest',
]
