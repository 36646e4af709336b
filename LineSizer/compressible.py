"""Compressible (gas) flow through a straight pipe.

Isothermal flow is integrated along the pipe in equal segments. Molar flow
is the conserved quantity; density, velocity, Reynolds number and friction
factor are re-evaluated at the pressure of each segment inlet and the
Darcy-Weisbach pressure drop of the segment is subtracted before moving to
the next one.
"""
from math import log
from collections import namedtuple
from scipy.optimize import root_scalar
from . import logger
from .constants import R_UNIV, G, N_SEGMENTS, P_FLOOR, MAX_ITER
from .std_conditions import to_SI
from .friction import f_Darcy
from .gas import gas_density, actual_flow, molar_flow_from_volumetric, Mach
from .piping import FlowResult, HydraulicError, Re, dP_Darcy

SegmentResult = namedtuple('SegmentResult', [
    'x',  # distance of the segment inlet from pipe inlet, m
    'P',  # pressure at the segment inlet, Pa
    'density',  # kg/m**3
    'velocity',  # m/s
    'Re',
    'f',
    'dP',  # pressure drop over the segment, Pa
    'dP_elevation',  # static head part of dP, Pa
    'n_dot',  # molar flow recovered from local P, Q, Z, T, kmol/s
])


def _local_state(pipe, gas, n_dot, P, T, method):
    """Evaluate gas flow at local pressure `P`.

    Returns
    -------
    tuple
        Z, density, velocity, Reynolds number, friction factor
    """
    Z = gas.Z_at(P, T)
    rho = gas_density(P, T, Z, gas.MW)
    v = actual_flow(n_dot, P, T, Z) / pipe.area
    Re_ = Re(rho, v, pipe.ID, gas.viscosity)
    f = f_Darcy(Re_, pipe.eps_r, method)
    return Z, rho, v, Re_, f


def _is_valid(pipe, gas, n_dot, P_in, T):
    return pipe.is_valid and gas.is_valid and n_dot > 0 and P_in > 0 and \
        T > 0


def march(pipe, gas, n_dot, P_in, T, N=N_SEGMENTS, P_floor=P_FLOOR,
          elevation=0, method='colebrook'):
    """Generate segment states from pipe inlet to outlet.

    Stops early, without yielding it, at the first segment that would take
    the pressure below `P_floor`.

    Parameters
    ----------
    pipe : PipeGeometry
    gas : GasComposition
    n_dot : float
        Molar flow, kmol/s
    P_in : float
        Inlet pressure, Pa absolute
    T : float
        Flow temperature, K
    N : int
        Number of equal segments.
    P_floor : float
        Lowest allowed pressure, Pa absolute.
    elevation : float
        Outlet elevation above inlet, m; rises evenly along the pipe.
    method : str
        Friction factor formula, see `friction.f_Darcy`.

    Yields
    ------
    SegmentResult
    """
    dL = pipe.L / N
    dz = elevation / N
    P = P_in
    for i in range(N):
        Z, rho, v, Re_, f = _local_state(pipe, gas, n_dot, P, T, method)
        dP_elevation = rho * G * dz
        dP = dP_Darcy(f*dL/pipe.ID, rho, v) + dP_elevation
        if P - dP < P_floor:
            logger.warning(f'Pressure falls below {P_floor/1e5:.3g} bara at '
                           f'{i*dL:.4g} m of {pipe.L:.4g} m; flow is choked.')
            return
        yield SegmentResult(x=i*dL, P=P, density=rho, velocity=v, Re=Re_,
                            f=f, dP=dP, dP_elevation=dP_elevation,
                            n_dot=P*v*pipe.area/(Z*R_UNIV*T))
        P -= dP


def integrate(pipe, gas, n_dot, P_in, T, N=N_SEGMENTS, P_floor=P_FLOOR,
              elevation=0, method='colebrook'):
    """Calculate isothermal gas flow through a straight pipe.

    Parameters
    ----------
    pipe : PipeGeometry
    gas : GasComposition
        Molecular weight, compressibility and viscosity of the gas.
    n_dot : float or Quantity {substance: 1, time: -1}
        Molar flow, kmol/s
    P_in : float or Quantity {length: -1, mass: 1, time: -2}
        Inlet pressure, absolute.
    T : float or Quantity {temperature: 1}
        Flow temperature, constant along the pipe.
    N : int
        Number of segments.
    P_floor : float
        Pressure floor, Pa absolute. Integration halts before it is crossed
        and the partial result is returned with `choked` set.
    elevation : float or Quantity {length: 1}
        Outlet elevation above inlet; negative for downhill lines.

    Returns
    -------
    FlowResult or None
        None when diameter, length, molar flow, viscosity or state variables
        are not positive, or the inlet pressure is not above `P_floor`.
    """
    n_dot = to_SI(n_dot, 'kmol/s')
    P_in = to_SI(P_in, 'Pa')
    T = to_SI(T, 'K')
    elevation = to_SI(elevation, 'm')
    if not _is_valid(pipe, gas, n_dot, P_in, T) or N < 1 or \
            P_in <= P_floor:
        logger.warning(f'No gas flow result for {pipe}, {gas!r}, '
                       f'n_dot={n_dot:.3g} kmol/s, P={P_in:.4g} Pa, '
                       f'T={T:.4g} K')
        return None
    _, rho_in, v_in, Re_in, f_in = _local_state(pipe, gas, n_dot, P_in, T,
                                                method)
    executed = 0
    dP_total = dP_elevation = 0
    sum_v = sum_rho = sum_Re = sum_f = 0
    for segment in march(pipe, gas, n_dot, P_in, T, N, P_floor, elevation,
                         method):
        executed += 1
        dP_total += segment.dP
        dP_elevation += segment.dP_elevation
        sum_v += segment.velocity
        sum_rho += segment.density
        sum_Re += segment.Re
        sum_f += segment.f
    P_out = P_in - dP_total
    Z_out, rho_out, v_out, _, _ = _local_state(pipe, gas, n_dot, P_out, T,
                                               method)
    if executed:
        averages = (sum_v/executed, sum_rho/executed, sum_Re/executed,
                    sum_f/executed)
    else:
        averages = (v_in, rho_in, Re_in, f_in)
    v_avg, rho_avg, Re_avg, f_avg = averages
    return FlowResult(dP=dP_total, dP_friction=dP_total-dP_elevation,
                      dP_elevation=dP_elevation, P_out=P_out,
                      velocity=v_avg, density=rho_avg, Re=Re_avg, f=f_avg,
                      v_in=v_in, v_out=v_out, rho_in=rho_in, rho_out=rho_out,
                      Mach=Mach(v_out, T, gas.MW, Z_out, gas.k),
                      L=executed*pipe.L/N, segments=executed,
                      choked=executed < N)


def gas_flow(pipe, gas, Q, P_in, T, basis='actual', P_base=None,
             T_base=None, Z_base=1, **kwargs):
    """Calculate gas flow through a pipe for a declared volumetric flow.

    Parameters
    ----------
    Q : float or Quantity {length: 3, time: -1}
        Volumetric flow rate at conditions defined by `basis`, see
        `gas.molar_flow_from_volumetric`.
    P_in : float or Quantity {length: -1, mass: 1, time: -2}
        Inlet pressure, absolute.
    T : float or Quantity {temperature: 1}
        Flow temperature.
    kwargs
        Passed to `integrate`.

    Returns
    -------
    FlowResult or None
    """
    P_in = to_SI(P_in, 'Pa')
    T = to_SI(T, 'K')
    Z_in = gas.Z_at(P_in, T)
    n_dot = molar_flow_from_volumetric(Q, basis, P_in, T, Z_in,
                                       P_base, T_base, Z_base)
    return integrate(pipe, gas, n_dot, P_in, T, **kwargs)


def molar_flow_for_outlet(pipe, gas, P_in, P_out, T, **kwargs):
    """Calculate molar flow that gives outlet pressure `P_out`.

    Inverse of `integrate` solved with bracketing root finder.

    Returns
    -------
    float
        Molar flow, kmol/s
    """
    P_in = to_SI(P_in, 'Pa')
    P_out = to_SI(P_out, 'Pa')
    T = to_SI(T, 'K')
    P_floor = kwargs.get('P_floor', P_FLOOR)
    if P_in <= P_out:
        raise HydraulicError(f'Input pressure less or equal to output: '
                             f'{P_in:.4g} Pa, {P_out:.4g} Pa')
    if P_out < P_floor:
        raise HydraulicError(f'Output pressure {P_out:.4g} Pa is below the '
                             f'pressure floor {P_floor:.4g} Pa')

    def to_solve(n_dot):
        result = integrate(pipe, gas, n_dot, P_in, T, **kwargs)
        if result is None:
            raise HydraulicError('Gas flow is not defined for given input.')
        if result.choked:
            return -P_in
        return result.P_out - P_out

    n_low = 1e-9
    n_high = 1e-8
    for _ in range(40):
        if to_solve(n_high) < 0:
            break
        n_low, n_high = n_high, n_high*4
    else:
        raise HydraulicError('Could not bracket molar flow for '
                             f'P_out={P_out:.4g} Pa')
    solution = root_scalar(to_solve, bracket=[n_low, n_high],
                           method='brentq', xtol=1e-15, rtol=1e-10)
    return solution.root


def dP_isot(pipe, gas, n_dot, P_in, T, f=None, tol=1e-9, max_iter=MAX_ITER):
    """Calculate pressure drop through a pipe for isothermal compressible
    flow in closed form.

    See 4.4 of "Pipe flow, A Practical and Comprehensive Guide", Rennels,
    Hobart, Hudson, 2012. Compressibility and viscosity are taken at inlet;
    Reynolds number, and thus friction factor, is constant along the pipe
    for constant viscosity.

    Returns
    -------
    float
        Pressure drop, Pa; 0 for non-physical input.
    """
    n_dot = to_SI(n_dot, 'kmol/s')
    P1 = to_SI(P_in, 'Pa')
    T = to_SI(T, 'K')
    if not _is_valid(pipe, gas, n_dot, P1, T):
        logger.warning(f'No isothermal pressure drop for {pipe}, {gas!r}, '
                       f'n_dot={n_dot:.3g} kmol/s, P={P1:.4g} Pa, '
                       f'T={T:.4g} K')
        return 0
    Z = gas.Z_at(P1, T)
    G_flux = n_dot * gas.MW / pipe.area
    if f is None:
        f = f_Darcy(G_flux*pipe.ID/gas.viscosity, pipe.eps_r)
    K = f * pipe.L / pipe.ID
    RT = Z * R_UNIV * T / gas.MW
    P2 = P1
    for _ in range(max_iter):
        sq_diff = G_flux**2 * RT * (2*log(P1/P2) + K)
        if sq_diff >= P1**2:
            raise HydraulicError('Flow is choked, reduce hydraulic '
                                 'resistance or mass flow.')
        P2_new = (P1**2 - sq_diff)**0.5
        converged = abs(P2_new-P2)/P2_new < tol
        P2 = P2_new
        if converged:
            break
    else:
        logger.debug(f'Isothermal outlet pressure did not converge in '
                     f'{max_iter} iterations.')
    return P1 - P2
