"""
Physical constants, unit conversions and presentation scales. Every value the
simulation would otherwise embed as a literal lives here under a name.
"""

import math

# Physics
G_DEFAULT = 6.673e-11  # m^3 kg^-1 s^-2
SOFTENING_DEFAULT = 3e4  # m, bounds the force as two bodies approach
MIN_SEPARATION_DEFAULT = 0.0  # m, separations at or below this are degenerate

# Units
KPH = 1.0 / 3.6  # km/h -> m/s, historically written as 0.277777778
DAY = 86400.0  # s

# Timesteps
FIXED_TIMESTEP = 100.0  # s per step for the planar canvas view
FPS = 60
FRAME_TIME_BUDGET = 10e3  # simulated seconds per wall-clock second in the scene view

# Presentation
METERS_PER_PIXEL = 5e6
VELOCITY_VECTOR_SCALE = 500.0  # (m/s) per pixel when drawing velocity arrows
FORCE_VECTOR_SCALE = 10e20  # N per pixel when drawing force arrows

TWO_PI = 2 * math.pi
