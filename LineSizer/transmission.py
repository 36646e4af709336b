"""Empirical gas transmission equations.

SI forms from E. S. Menon, "Gas Pipeline Hydraulics", 2005, chapter 2:
Q in m**3/day at base conditions, P in kPa, L in km, T in K, D in mm.
Inputs and outputs of the public functions are SI (m**3/s, Pa, m, K).
"""
from collections import namedtuple
from . import logger
from .std_conditions import to_SI, T_STD, P_STD
from .piping import HydraulicError

# coefficient, exponent of Tb/Pb, exponent of gravity, flow exponent,
# diameter exponent
TransmissionEquation = namedtuple('TransmissionEquation', [
    'C', 'base_exp', 'Sg_exp', 'flow_exp', 'D_exp'])

WEYMOUTH = TransmissionEquation(3.7435e-3, 1, 1, 0.5, 2.667)
PANHANDLE_A = TransmissionEquation(4.5965e-3, 1.0788, 0.8539, 0.5394, 2.6182)
PANHANDLE_B = TransmissionEquation(1.002e-2, 1.02, 0.961, 0.51, 2.53)

EQUATIONS = {
    'weymouth': WEYMOUTH,
    'panhandle_a': PANHANDLE_A,
    'panhandle_b': PANHANDLE_B,
}


def _P_out(eq, Q_std, P_in, L, D, T, Sg, Z, T_base, P_base, E):
    """Outlet pressure, kPa, from the equation solved for P2**2.

    Returns None when P2**2 is negative.
    """
    Q_day = Q_std * 86400
    P1 = P_in / 1000
    Pb = P_base / 1000
    L_km = L / 1000
    D_mm = D * 1000
    coefficient = eq.C * E * (T_base/Pb)**eq.base_exp * D_mm**eq.D_exp
    dP_sq = (Q_day/coefficient)**(1/eq.flow_exp) * Sg**eq.Sg_exp * T * \
        L_km * Z
    P2_sq = P1**2 - dP_sq
    if P2_sq < 0:
        return None
    return P2_sq**0.5


def dP_transmission(method, Q_std, P_in, L, D, T, Sg, Z=1, T_base=T_STD,
                    P_base=P_STD, E=1):
    """Calculate pressure drop of gas transmission line.

    Parameters
    ----------
    method : str
        'weymouth', 'panhandle_a' or 'panhandle_b'
    Q_std : float or Quantity {length: 3, time: -1}
        Flow rate at base conditions.
    P_in : float or Quantity {length: -1, mass: 1, time: -2}
        Inlet pressure, absolute.
    L : float or Quantity {length: 1}
        Pipe length.
    D : float or Quantity {length: 1}
        Pipe inside diameter.
    T : float or Quantity {temperature: 1}
        Average gas temperature.
    Sg : float
        Gas gravity relative to air.
    Z : float
        Compressibility factor at flowing conditions.
    E : float
        Pipeline efficiency.

    Returns
    -------
    float
        Pressure drop, Pa. Full inlet pressure when the line cannot pass
        the flow; 0 for non-positive input.
    """
    try:
        eq = EQUATIONS[method]
    except KeyError:
        raise HydraulicError(f'Unknown transmission equation: {method}')
    Q_std = to_SI(Q_std, 'm**3/s')
    P_in = to_SI(P_in, 'Pa')
    L = to_SI(L, 'm')
    D = to_SI(D, 'm')
    T = to_SI(T, 'K')
    T_base = to_SI(T_base, 'K')
    P_base = to_SI(P_base, 'Pa')
    if min(Q_std, P_in, L, D, T, Sg, Z, T_base, P_base, E) <= 0:
        return 0
    P2 = _P_out(eq, Q_std, P_in, L, D, T, Sg, Z, T_base, P_base, E)
    if P2 is None:
        logger.warning(f'{method} equation: flow {Q_std:.4g} Sm3/s cannot '
                       'be passed, outlet pressure is not positive.')
        return P_in
    return P_in - P2*1000


def weymouth(Q_std, P_in, L, D, T, Sg, **kwargs):
    return dP_transmission('weymouth', Q_std, P_in, L, D, T, Sg, **kwargs)


def panhandle_a(Q_std, P_in, L, D, T, Sg, **kwargs):
    return dP_transmission('panhandle_a', Q_std, P_in, L, D, T, Sg, **kwargs)


def panhandle_b(Q_std, P_in, L, D, T, Sg, **kwargs):
    return dP_transmission('panhandle_b', Q_std, P_in, L, D, T, Sg, **kwargs)
