"""Line sizing criteria.

Computed velocity, momentum flux (rho*v**2), Mach number and pressure
gradient are compared with the limits of a service. The checks are advisory:
every limit is optional and a missing limit yields `Status.NA`.
"""
import os
from enum import Enum
from collections import namedtuple
from serialize import load
from . import logger, __location__
from .constants import C_EROSIONAL
from .std_conditions import ureg, Q_, to_SI, P_STD
from .piping import PipingError


class Status(Enum):
    OK = 'ok'
    WARN = 'warning'
    NA = 'na'


SizingCriterion = namedtuple('SizingCriterion', [
    'service', 'pressure_range',
    'max_velocity',  # m/s
    'max_rho_v2',  # kg/(m*s**2)
    'max_dP_per_L',  # Pa/m
    'max_Mach',
    'min_velocity',  # m/s
    'P_min',  # Pa gauge, lower bound of the pressure range
    'P_max',  # Pa gauge, upper bound of the pressure range
    'note',
    'velocity_by_size',  # ((largest NPS or None, m/s), ...) for liquids
], defaults=(None, None, None, None, None, None, None, None, None))

CriteriaReport = namedtuple('CriteriaReport', [
    'velocity', 'pressure_drop', 'momentum', 'mach', 'warnings'])


def _limit(value, unit, SI_unit):
    if value is None:
        return None
    return Q_(value, unit).m_as(SI_unit)


def _load_catalog(table_name):
    """Load criteria table converting limits to SI units."""
    yaml_table = load(os.path.join(__location__, table_name))
    result = {}
    for line_type, services in yaml_table.items():
        result[line_type] = {}
        for service, ranges in services.items():
            result[line_type][service] = {}
            for pressure_range, limits in ranges.items():
                velocity = limits.get('velocity')
                velocity_by_size = None
                if isinstance(velocity, list):
                    velocity_by_size = tuple(tuple(pair) for pair in velocity)
                    velocity = None
                result[line_type][service][pressure_range] = SizingCriterion(
                    service=service,
                    pressure_range=pressure_range,
                    max_velocity=velocity,
                    max_rho_v2=limits.get('rho_v2'),
                    max_dP_per_L=_limit(limits.get('dP'), 'bar/km', 'Pa/m'),
                    max_Mach=limits.get('Mach'),
                    min_velocity=limits.get('min_velocity'),
                    P_min=_limit(limits.get('P_min'), 'bar', 'Pa'),
                    P_max=_limit(limits.get('P_max'), 'bar', 'Pa'),
                    note=limits.get('note'),
                    velocity_by_size=velocity_by_size)
    return result


CATALOG = _load_catalog('sizing_criteria.yaml')


def services(line_type='gas', catalog=None):
    """List services available for `line_type`."""
    if catalog is None:
        catalog = CATALOG
    return list(catalog.get(line_type, {}))


def pressure_ranges(service, line_type='gas', catalog=None):
    """List pressure ranges defined for `service`."""
    if catalog is None:
        catalog = CATALOG
    try:
        return list(catalog[line_type][service])
    except KeyError:
        raise PipingError(f'Unknown {line_type} service: {service}')


def _for_size(crit, size):
    """Resolve size dependent velocity limit for nominal pipe size, inch."""
    if crit.velocity_by_size is None:
        return crit
    if size is None:
        raise PipingError(f'Nominal pipe size is required for the velocity '
                          f'limit of {crit.service}')
    size = to_SI(size, 'inch')
    for max_size, velocity in crit.velocity_by_size:
        if max_size is None or size <= max_size:
            return crit._replace(max_velocity=velocity)
    raise PipingError(f'No velocity limit of {crit.service} for '
                      f'NPS {size:g}')


def criterion(service, pressure_range='All', line_type='gas', catalog=None,
              size=None):
    """Look up the criterion of a service and pressure range.

    Parameters
    ----------
    size : float or Quantity {length: 1}, optional
        Nominal pipe size, inch. Required by services whose velocity limit
        depends on the line size (liquid lines).
    """
    if catalog is None:
        catalog = CATALOG
    try:
        crit = catalog[line_type][service][pressure_range]
    except KeyError:
        raise PipingError(f'No {line_type} sizing criterion for '
                          f'{service}, {pressure_range}')
    return _for_size(crit, size)


def criterion_for_pressure(service, P, line_type='gas', catalog=None,
                           size=None):
    """Select the criterion of `service` covering absolute pressure `P`.

    Pressure ranges are defined in gauge pressure relative to 1.01325 bar.
    """
    if catalog is None:
        catalog = CATALOG
    P_gauge = to_SI(P, 'Pa') - P_STD.m_as(ureg.Pa)
    for pressure_range in pressure_ranges(service, line_type, catalog):
        crit = catalog[line_type][service][pressure_range]
        if crit.P_min is not None and P_gauge < crit.P_min:
            continue
        if crit.P_max is not None and P_gauge >= crit.P_max:
            continue
        return _for_size(crit, size)
    raise PipingError(f'No pressure range of {service} covers '
                      f'{P_gauge/1e5:.3g} barg')


def erosional_velocity(rho, C=C_EROSIONAL):
    """Calculate erosional velocity per API RP 14E, m/s.

    Ve = C/sqrt(rho) with rho in lb/ft**3 and Ve in ft/s.
    """
    rho = to_SI(rho, 'kg/m**3')
    if rho <= 0:
        return 0
    rho_imp = Q_(rho, ureg.kg/ureg.m**3).m_as(ureg.lb/ureg.ft**3)
    return Q_(C/rho_imp**0.5, ureg.ft/ureg.s).m_as(ureg.m/ureg.s)


def _check(value, limit, low_limit=None):
    if limit is None and low_limit is None:
        return Status.NA
    if value is None:
        return Status.NA
    if limit is not None and value > limit:
        return Status.WARN
    if low_limit is not None and value < low_limit:
        return Status.WARN
    return Status.OK


def evaluate(result, criterion):
    """Compare flow result with the limits of a sizing criterion.

    Velocity, momentum and Mach number are checked at the point of highest
    velocity (outlet for gas). Pressure drop is checked per unit length.

    Parameters
    ----------
    result : FlowResult or None
    criterion : SizingCriterion

    Returns
    -------
    CriteriaReport
        Status of the velocity, pressure drop, momentum and Mach checks and
        the warning messages of failed checks.
    """
    if result is None:
        return CriteriaReport(Status.NA, Status.NA, Status.NA, Status.NA, [])
    checks = [
        ('velocity', result.v_max, criterion.max_velocity,
         criterion.min_velocity, 'Velocity', 'm/s'),
        ('pressure_drop', result.dP_per_L, criterion.max_dP_per_L, None,
         'Pressure drop', 'Pa/m'),
        ('momentum', result.rho_v2, criterion.max_rho_v2, None,
         'Momentum', 'kg/(m*s**2)'),
        ('mach', result.Mach, criterion.max_Mach, None, 'Mach number', None),
    ]
    statuses = {}
    warnings = []
    for name, value, limit, low_limit, label, unit in checks:
        status = _check(value, limit, low_limit)
        statuses[name] = status
        if status is Status.WARN:
            unit = f' {unit}' if unit else ''
            if limit is not None and value > limit:
                warnings.append(f'{label} ({value:.4g}{unit}) exceeds '
                                f'limit ({limit:.4g}{unit})')
            else:
                warnings.append(f'{label} ({value:.4g}{unit}) is below '
                                f'minimum ({low_limit:.4g}{unit})')
    for message in warnings:
        logger.info(message)
    return CriteriaReport(warnings=warnings, **statuses)
