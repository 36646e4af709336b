"""Real gas state at constant temperature and compressibility.

All functions accept plain floats in SI units (Pa, K, kg/kmol, m**3/s,
kmol/s) or pint Quantities and return SI floats.
"""
from math import sqrt
from . import logger
from .constants import R_UNIV, K_DEFAULT
from .std_conditions import to_SI, T_NTP, P_NTP, T_STD, P_STD
from .piping import HydraulicError


class GasComposition:
    """Gas properties held constant along the pipe.

    Parameters
    ----------
    MW : float or Quantity {mass: 1, substance: -1}
        Molecular weight, kg/kmol.
    Z : float or callable
        Compressibility factor. A callable is evaluated as Z(P, T) with SI
        floats and lets the integrator re-derive Z at the local pressure.
    viscosity : float or Quantity {mass: 1, length: -1, time: -1}
        Dynamic viscosity, Pa*s.
    k : float
        Heat capacity ratio Cp/Cv, used for speed of sound only.
    """
    def __init__(self, MW, Z=1, viscosity=1.1e-5, k=K_DEFAULT):
        self.MW = to_SI(MW, 'kg/kmol')
        self.Z = Z if callable(Z) else to_SI(Z, 'dimensionless')
        self.viscosity = to_SI(viscosity, 'Pa*s')
        self.k = float(k)

    def Z_at(self, P, T):
        """Compressibility factor at absolute pressure `P`, Pa and `T`, K."""
        if callable(self.Z):
            return float(self.Z(P, T))
        return self.Z

    @property
    def is_valid(self):
        return self.MW > 0 and self.viscosity > 0 and \
            (callable(self.Z) or self.Z > 0)

    def __repr__(self):
        return (f'GasComposition(MW={self.MW:.4g}, Z={self.Z!r}, '
                f'viscosity={self.viscosity:.3g}, k={self.k:.3g})')


def gas_density(P, T, Z, MW):
    """Calculate real gas density rho = P*MW/(Z*R*T), kg/m**3.

    Returns 0 for non-positive input.
    """
    P = to_SI(P, 'Pa')
    T = to_SI(T, 'K')
    Z = to_SI(Z, 'dimensionless')
    MW = to_SI(MW, 'kg/kmol')
    if P <= 0 or T <= 0 or Z <= 0 or MW <= 0:
        return 0
    return P * MW / (Z*R_UNIV*T)


def molar_flow(Q, P, T, Z=1):
    """Convert volumetric flow at (P, T, Z) into molar flow, kmol/s."""
    Q = to_SI(Q, 'm**3/s')
    P = to_SI(P, 'Pa')
    T = to_SI(T, 'K')
    Z = to_SI(Z, 'dimensionless')
    if Q <= 0 or P <= 0 or T <= 0 or Z <= 0:
        return 0
    return P * Q / (Z*R_UNIV*T)


def actual_flow(n_dot, P, T, Z=1):
    """Volumetric flow at (P, T, Z) carrying molar flow `n_dot`, m**3/s."""
    n_dot = to_SI(n_dot, 'kmol/s')
    P = to_SI(P, 'Pa')
    T = to_SI(T, 'K')
    Z = to_SI(Z, 'dimensionless')
    if P <= 0:
        return 0
    return n_dot * Z * R_UNIV * T / P


_BASES = {
    'standard': (P_STD, T_STD),
    'normal': (P_NTP, T_NTP),
}


def molar_flow_from_volumetric(Q, basis='actual', P=None, T=None, Z=1,
                               P_base=None, T_base=None, Z_base=1):
    """Convert declared volumetric gas flow into molar flow.

    Parameters
    ----------
    Q : float or Quantity {length: 3, time: -1}
        Declared volumetric flow rate.
    basis : str
        'actual' - `Q` is at operating conditions `P`, `T`, `Z`;
        'standard' - `Q` is at base conditions (60 degF, 1.01325 bara);
        'normal' - `Q` is at normal conditions (0 degC, 101325 Pa).
        `P_base`, `T_base` override the conditions of the chosen basis.
    Z_base : float
        Compressibility at base conditions.

    Returns
    -------
    float
        Molar flow, kmol/s
    """
    if basis == 'actual':
        if P is None or T is None:
            raise HydraulicError('Operating P and T are required for '
                                 'actual volumetric flow.')
        return molar_flow(Q, P, T, Z)
    try:
        P_ref, T_ref = _BASES[basis]
    except KeyError:
        raise HydraulicError(f'Unknown flow basis: {basis}')
    if P_base is not None:
        P_ref = P_base
    if T_base is not None:
        T_ref = T_base
    return molar_flow(Q, P_ref, T_ref, Z_base)


def speed_sound(T, MW, Z=1, k=K_DEFAULT):
    """Calculate speed of sound of a real gas sqrt(k*Z*R*T/MW), m/s."""
    T = to_SI(T, 'K')
    MW = to_SI(MW, 'kg/kmol')
    Z = to_SI(Z, 'dimensionless')
    if T <= 0 or MW <= 0 or Z <= 0 or k <= 0:
        return 0
    return sqrt(k*Z*R_UNIV*T/MW)


def Mach(v, T, MW, Z=1, k=K_DEFAULT):
    """Calculate Mach number for velocity `v` at static temperature `T`."""
    c = speed_sound(T, MW, Z, k)
    if c == 0:
        logger.warning('Speed of sound is not defined, Mach number set to 0.')
        return 0
    return to_SI(v, 'm/s') / c
