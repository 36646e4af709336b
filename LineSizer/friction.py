"""Darcy friction factor.

Laminar flow uses the Hagen-Poiseuille closed form, turbulent and
transitional flow use the Colebrook-White equation solved by Newton-Raphson
from a Swamee-Jain seed. Explicit correlations are kept for comparison.
"""
from math import log, log10, sqrt, isfinite
from collections import namedtuple
from . import logger
from .constants import RE_LAMINAR, RE_TURBULENT, MAX_ITER, TOL, F_FLOOR

LN10 = log(10)

ColebrookSolution = namedtuple('ColebrookSolution',
                               ['f', 'iterations', 'converged'])


def flow_regime(Re_):
    """Classify the flow by Reynolds number."""
    if Re_ < RE_LAMINAR:
        return 'Laminar'
    if Re_ < RE_TURBULENT:
        return 'Transitional'
    return 'Turbulent'


def f_Darcy(Re_, eps_r, method='colebrook'):
    """Calculate Darcy friction factor.

    Parameters
    ----------
    Re_ : float or Quantity {dimensionless}
        Reynolds number
    eps_r : float or Quantity {dimensionless}
        Relative roughness of the pipe
    method : str
        Friction factor formula name: 'colebrook', 'swamee_jain',
        'haaland', 'churchill' or 'serghide'.

    Returns
    -------
    float
        Darcy friction coefficient; 0 for non-physical input.
    """
    try:
        formula = _METHODS[method]
    except KeyError:
        raise ValueError(f'Unknown friction factor method: {method}')
    Re_ = float(Re_)
    eps_r = float(eps_r)
    if not (isfinite(Re_) and isfinite(eps_r)) or Re_ <= 0 or eps_r < 0:
        logger.warning(f'No friction factor for Re={Re_:.3g}, '
                       f'eps/D={eps_r:.3g}')
        return 0
    if Re_ < RE_LAMINAR:
        return 64 / Re_
    return formula(Re_, eps_r)


def swamee_jain(Re_, eps_r):
    """Calculate Darcy friction factor using Swamee-Jain explicit
    approximation of Colebrook equation.

    Parameters
    ----------
    Re_ : float
        Reynolds number
    eps_r : float
        Relative roughness of the pipe

    Returns
    -------
    float
        Darcy friction coefficient
    """
    return 0.25 / log10(eps_r/3.7 + 5.74/Re_**0.9)**2


def haaland(Re_, eps_r):
    """Calculate Darcy friction factor using Haaland formula."""
    return (-1.8 * log10((eps_r/3.7)**1.11 + 6.9/Re_))**-2


def colebrook_residual(f, Re_, eps_r):
    """Residual of Colebrook-White equation written for Darcy friction factor:

    1/sqrt(f) + 2*log10(eps_r/3.7 + 2.51/(Re*sqrt(f)))
    """
    return 1/sqrt(f) + 2*log10(eps_r/3.7 + 2.51/(Re_*sqrt(f)))


def colebrook(Re_, eps_r, max_iter=MAX_ITER, tol=TOL):
    """Solve Colebrook-White equation for Darcy friction factor.

    Newton-Raphson on the residual in f with analytic derivative, seeded
    by Swamee-Jain. Iterates that fall to zero or below are replaced with
    `F_FLOOR`. When `max_iter` is reached the last iterate is returned with
    `converged` set to False.

    Parameters
    ----------
    Re_ : float
        Reynolds number
    eps_r : float
        Relative roughness of the pipe

    Returns
    -------
    ColebrookSolution
        f, number of iterations, convergence flag
    """
    a = eps_r / 3.7
    b = 2.51 / Re_
    f = swamee_jain(Re_, eps_r)
    for i in range(1, max_iter+1):
        sqrt_f = sqrt(f)
        residual = 1/sqrt_f + 2*log10(a + b/sqrt_f)
        d_residual = -0.5 / (f*sqrt_f) * (1 + 2/LN10 * b/(a + b/sqrt_f))
        f_new = f - residual/d_residual
        if f_new <= 0:
            f_new = F_FLOOR
        if abs(f_new - f) < tol:
            return ColebrookSolution(f_new, i, True)
        f = f_new
    logger.debug(f'Colebrook-White did not converge in {max_iter} '
                 f'iterations for Re={Re_:.3g}, eps/D={eps_r:.3g}')
    return ColebrookSolution(f, max_iter, False)


def _colebrook_f(Re_, eps_r):
    return colebrook(Re_, eps_r).f


def churchill(Re_, eps_r):
    """Calculate Darcy friction factor using modified Churchill formula.
    See 8.5.2 of "Pipe flow, A Practical and Comprehensive Guide", Rennels,
    Hobart, Hudson, 2012.

    Parameters
    ----------
    Re_ : float
        Reynolds number
    eps_r : float
        Relative roughness of the pipe

    Returns
    -------
    float
        Darcy friction coefficient
    """
    A1 = 0.883 * log(Re_)**1.282 / Re_**1.007
    A2 = 0.27 * eps_r
    A3 = - 110 * eps_r / Re_
    A = (0.8687 * log(A1+A2+A3))**16
    B = (13269 / Re_)**16
    f = ((64/Re_)**12 + 1/(A+B)**(3/2))**(1/12)
    return f


def serghide(Re_, eps_r):
    """Calculate Darcy friction factor using Serghide solution to
    Colebrook equation.

    See Crane TP-410 2013, equation 6-6.
    """
    A = -2 * log10(eps_r/3.7+12/Re_)
    B = -2 * log10(eps_r/3.7+2.51*A/Re_)
    C = -2 * log10(eps_r/3.7+2.51*B/Re_)
    f = (A - (B-A)**2/(C-2*B+A))**(-2)
    return f


_METHODS = {
    'colebrook': _colebrook_f,
    'swamee_jain': swamee_jain,
    'haaland': haaland,
    'churchill': churchill,
    'serghide': serghide,
}
