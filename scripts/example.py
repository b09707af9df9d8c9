"""
example.py - Simple Example for latticenoise

Basic workflow for building a seeded noise engine and drawing samples from it:
single points, fractal tiling noise, and a stepped path. Logging is switched
on so engine construction and batch runs are reported on the console.
"""

import latticenoise as ln

#------------------------------------------------------------------------------#
#    Set Up                                                                    #
#------------------------------------------------------------------------------#

ln.logger.setupMain(outLevel=ln.logger.DEBUG)  # console logging, debug level
eng = ln.newEngine(seed=2024)                  # same seed -> same noise field
print(eng)

#------------------------------------------------------------------------------#
#    Single Points                                                             #
#------------------------------------------------------------------------------#

print(eng.evaluate(0.5, 0.5, 0.0))             # normalized value in [0, 1]
print(eng.raw(0.5, 0.5, 0.0))                  # raw value in [-1, 1]
print(eng.evaluate(3, -8, 12))                 # lattice points give 0.5

#------------------------------------------------------------------------------#
#    Fractal, Tiling Noise                                                     #
#------------------------------------------------------------------------------#

terrain = eng.evaluate(
    1.3, 2.7, 0.0,
    repeat=(16, 16, 0),                        # tiles every 16 units in x, y
    octaves=5,                                 # five layers of detail
    persistence=0.5,                           # each layer half as strong
)
print(terrain)

#------------------------------------------------------------------------------#
#    Stepped Path                                                              #
#------------------------------------------------------------------------------#

gusts = eng.sampleSequence(
    startX=0.0, deltaX=0.05,                   # drift along x
    startY=4.5, deltaY=0.0,                    # fixed y
    startZ=0.0, deltaZ=0.01,                   # slow change through z (time)
    count=600,
    octaves=3,
    persistence=0.5,
)
print(f"{len(gusts)} samples, "
      f"range [{gusts.min():.3f}, {gusts.max():.3f}]")

# Same request, split across threads; values are identical
fast = eng.sampleSequenceParallel(0.0, 0.05, 4.5, 0.0, 0.0, 0.01, count=600,
                                  octaves=3, persistence=0.5, workers=4)
print((fast == gusts).all())
