"""Numerical constants of the line sizing model, SI units."""

R_UNIV = 8314  # Universal gas constant, J/(kmol*K)
G = 9.80665  # Standard gravity, m/s**2

RE_LAMINAR = 2300  # Below: Hagen-Poiseuille f = 64/Re
RE_TURBULENT = 4000  # Regime classification only

MAX_ITER = 20  # Newton-Raphson iteration cap for Colebrook-White
TOL = 1e-10  # Absolute tolerance on successive friction factors
F_FLOOR = 0.001  # Replacement for non-positive friction factor iterates

N_SEGMENTS = 100  # Default discretization of the compressible integrator
P_FLOOR = 1e4  # Pa, 0.1 bara; integration stops below it

K_DEFAULT = 1.3  # Heat capacity ratio used when none is given
C_EROSIONAL = 100  # API RP 14E constant for continuous service
