"""Fluid properties from CoolProp for the line sizing inputs.

Thin wrapper over CoolProp's AbstractState that resolves a named pure fluid
at given pressure and temperature into `GasComposition` or `LiquidState`.
"""
import CoolProp.CoolProp as CP
from . import logger
from .std_conditions import to_SI
from .gas import GasComposition
from .piping import LiquidState, HydraulicError


def _state(fluid, P, T, backend='HEOS'):
    P = to_SI(P, 'Pa')
    T = to_SI(T, 'K')
    try:
        state = CP.AbstractState(backend, fluid)
        state.update(CP.PT_INPUTS, P, T)
    except ValueError as e:
        raise HydraulicError(f'Could not evaluate {fluid} at P={P:.4g} Pa, '
                             f'T={T:.4g} K: {e}') from e
    return state


def gas_composition(fluid, P, T, backend='HEOS', fixed_Z=True):
    """Build `GasComposition` of `fluid` at inlet conditions.

    Parameters
    ----------
    fluid : str
        CoolProp fluid name, e.g. 'methane', 'nitrogen'.
    P : float or Quantity {length: -1, mass: 1, time: -2}
        Absolute pressure.
    T : float or Quantity {temperature: 1}
    fixed_Z : bool
        If False, compressibility is re-evaluated by CoolProp at the local
        pressure of every segment.
    """
    state = _state(fluid, P, T, backend)
    if state.phase() not in (CP.iphase_gas, CP.iphase_supercritical_gas,
                             CP.iphase_supercritical):
        logger.warning(f'{fluid} is not a gas at given conditions.')
    Z = state.compressibility_factor() if fixed_Z else Z_function(fluid,
                                                                  backend)
    return GasComposition(MW=state.molar_mass()*1000, Z=Z,
                          viscosity=state.viscosity(),
                          k=state.cpmass()/state.cvmass())


def Z_function(fluid, backend='HEOS'):
    """Return compressibility factor of `fluid` as a function Z(P, T)."""
    state = CP.AbstractState(backend, fluid)

    def Z(P, T):
        state.update(CP.PT_INPUTS, P, T)
        return state.compressibility_factor()
    return Z


def liquid_state(fluid, P, T, backend='HEOS'):
    """Build `LiquidState` of `fluid` at given conditions."""
    state = _state(fluid, P, T, backend)
    return LiquidState(density=state.rhomass(), viscosity=state.viscosity())
