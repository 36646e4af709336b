"""Utilities for hydraulics calculations.

Pipe geometry, incompressible (liquid) flow and the result record shared
with the compressible integrator. The main source of the equations is
Crane TP-410.
"""
from math import pi
from collections import namedtuple
from . import logger
from .constants import G
from .std_conditions import to_SI
from .friction import f_Darcy, flow_regime


class PipingError(Exception):
    def __init__(self, message):
        self.message = message
        super().__init__(message)


class HydraulicError(Exception):
    def __init__(self, message):
        self.message = message
        super().__init__(message)


class PipeGeometry:
    """Straight pipe run, requires inside diameter and length.

    Values are stored in SI units; pint Quantities are converted on input.
    """
    def __init__(self, ID, L, eps=0):
        """Generate pipe object.

        Parameters
        ----------
        ID : float or ureg.Quantity {length: 1}
            Inside diameter of the pipe, m.
        L : float or ureg.Quantity {length: 1}
            Length of the pipe, m.
        eps : float or ureg.Quantity {length: 1}
            Absolute roughness, m. Default value for smooth pipe.
        """
        self.ID = to_SI(ID, 'm')
        self.L = to_SI(L, 'm')
        self.eps = to_SI(eps, 'm')

    @property
    def area(self):
        """float : Cross sectional area of pipe, m**2."""
        return pi * self.ID**2 / 4

    @property
    def eps_r(self):
        """float : Relative roughness; 0 for a pipe without diameter."""
        if self.ID <= 0:
            return 0
        return self.eps / self.ID

    @property
    def is_valid(self):
        return self.ID > 0 and self.L > 0 and self.eps >= 0

    def __str__(self):
        return f'Pipe, ID={self.ID*1000:.4g} mm, L={self.L:.4g} m, ' + \
            f'eps={self.eps*1000:.3g} mm'


class LiquidState:
    """Incompressible fluid: density, kg/m**3 and dynamic viscosity, Pa*s."""
    def __init__(self, density, viscosity):
        self.density = to_SI(density, 'kg/m**3')
        self.viscosity = to_SI(viscosity, 'Pa*s')

    @property
    def is_valid(self):
        return self.density > 0 and self.viscosity > 0

    def __repr__(self):
        return f'LiquidState(density={self.density:.4g}, ' + \
            f'viscosity={self.viscosity:.3g})'


_FlowResult = namedtuple('FlowResult', [
    'dP',  # total pressure drop, Pa
    'dP_friction',  # frictional part of dP, Pa
    'dP_elevation',  # static head part of dP, Pa; negative downhill
    'P_out',  # outlet pressure, Pa absolute; None when inlet is not given
    'velocity',  # flow averaged velocity, m/s
    'density',  # flow averaged density, kg/m**3
    'Re',  # flow averaged Reynolds number
    'f',  # flow averaged Darcy friction factor
    'v_in',  # inlet velocity, m/s
    'v_out',  # outlet velocity, m/s
    'rho_in',  # inlet density, kg/m**3
    'rho_out',  # outlet density, kg/m**3
    'Mach',  # Mach number at the outlet; None for liquid
    'L',  # length actually integrated, m
    'segments',  # number of segments executed
    'choked',  # integration stopped at the pressure floor
])


class FlowResult(_FlowResult):
    """Aggregate result of a single pressure drop calculation."""
    __slots__ = ()

    @property
    def dP_per_L(self):
        """float : Friction pressure gradient over integrated length, Pa/m."""
        if self.L <= 0:
            return 0
        return self.dP_friction / self.L

    @property
    def rho_v2(self):
        """float : Highest momentum flux along the line, kg/(m*s**2).

        Mass flux is constant, so the maximum is where velocity is highest.
        """
        return max(self.rho_in*self.v_in**2, self.rho_out*self.v_out**2)

    @property
    def v_max(self):
        return max(self.v_in, self.v_out)

    @property
    def head_loss(self):
        """float : Friction head loss, m of flowing fluid."""
        return head_loss(self.dP_friction, self.density)

    @property
    def regime(self):
        return flow_regime(self.Re)


def Re(rho, v, D, mu):
    """Calculate Reynolds number rho*v*D/mu; 0 for non-positive viscosity."""
    if mu <= 0:
        return 0
    return rho * v * D / mu


def velocity(Q, area):
    """Mean velocity of volumetric flow `Q` through `area`."""
    if area <= 0:
        return 0
    return Q / area


def dP_Darcy(K, rho, w):
    '''
    Darcy equation for pressure drop.
    K - resistance coefficient
    rho - density of flow at entrance
    w - flow speed
    '''
    return K * rho * w**2 / 2


def head_loss(dP, rho):
    """Convert pressure drop into head of fluid with density `rho`."""
    if rho <= 0:
        return 0
    return dP / (rho*G)


def dP_liquid(pipe, fluid, v, f):
    """Calculate pressure drop of incompressible flow in a straight pipe.

    Single evaluation of Darcy-Weisbach: dP = f*(L/D)*(rho*v**2/2).

    Parameters
    ----------
    pipe : PipeGeometry
    fluid : LiquidState
    v : float or Quantity {length: 1, time: -1}
        Mean velocity.
    f : float
        Darcy friction factor.

    Returns
    -------
    float
        Pressure drop, Pa; 0 for non-physical input.
    """
    v = to_SI(v, 'm/s')
    if not (pipe.is_valid and fluid.is_valid) or f <= 0:
        return 0
    K = f * pipe.L / pipe.ID
    return dP_Darcy(K, fluid.density, v)


def liquid_flow(pipe, fluid, Q, P_in=None, elevation=0, method='colebrook'):
    """Calculate incompressible flow through a straight pipe.

    Density and velocity are constant, so no discretization is needed.

    Parameters
    ----------
    pipe : PipeGeometry
    fluid : LiquidState
    Q : float or Quantity {length: 3, time: -1}
        Volumetric flow rate.
    P_in : float or Quantity {length: -1, mass: 1, time: -2}, optional
        Inlet pressure, absolute. Used to report outlet pressure.
    elevation : float or Quantity {length: 1}
        Outlet elevation above inlet, m; negative for downhill lines.
    method : str
        Friction factor formula, see `friction.f_Darcy`.

    Returns
    -------
    FlowResult or None
        None when geometry, fluid properties or flow are not positive.
    """
    Q = to_SI(Q, 'm**3/s')
    elevation = to_SI(elevation, 'm')
    if not (pipe.is_valid and fluid.is_valid) or Q <= 0:
        logger.warning(f'No liquid flow result for {pipe}, {fluid!r}, '
                       f'Q={Q:.3g} m3/s')
        return None
    rho = fluid.density
    v = velocity(Q, pipe.area)
    Re_ = Re(rho, v, pipe.ID, fluid.viscosity)
    f = f_Darcy(Re_, pipe.eps_r, method)
    dP_friction = dP_liquid(pipe, fluid, v, f)
    dP_elevation = rho * G * elevation
    dP = dP_friction + dP_elevation
    P_out = None
    if P_in is not None:
        P_out = to_SI(P_in, 'Pa') - dP
    return FlowResult(dP=dP, dP_friction=dP_friction,
                      dP_elevation=dP_elevation, P_out=P_out, velocity=v,
                      density=rho, Re=Re_, f=f, v_in=v, v_out=v, rho_in=rho,
                      rho_out=rho, Mach=None, L=pipe.L, segments=1,
                      choked=False)
