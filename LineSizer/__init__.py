"""
 `LineSizer` is a Python module for single-phase line sizing of gas and liquid
piping, using [Pint](https://github.com/hgrecco/pint) for unit handling and
[CoolProp](https://github.com/CoolProp/CoolProp) for optional fluid properties.

Provides:
    1. Darcy friction factor from Colebrook-White (Newton-Raphson) and
       explicit correlations.
    2. Real gas density and molar flow conversions.
    3. Segmented isothermal integration of compressible flow along a pipe.
    4. Darcy-Weisbach pressure drop for incompressible flow.
    5. Gas transmission equations (Weymouth, Panhandle A/B).
    6. Line sizing criteria checks (velocity, rho*v^2, Mach, pressure drop).
"""

import logging
import logging.config
import os

# Setting up logging
__location__ = os.path.dirname(os.path.abspath(__file__))
logging.config.fileConfig(os.path.join(__location__, 'logging.ini'),
                          disable_existing_loggers=False)
logger = logging.getLogger(__name__)


from .std_conditions import ureg, Q_, T_NTP, P_NTP, T_MSC, P_MSC, T_STD, P_STD
from .constants import *
from .friction import f_Darcy, colebrook, flow_regime
from .gas import GasComposition, gas_density, molar_flow, actual_flow, Mach
from .piping import PipeGeometry, LiquidState, FlowResult, PipingError, \
    HydraulicError, dP_liquid, liquid_flow
from .compressible import SegmentResult, integrate, gas_flow
from .transmission import dP_transmission
from .criteria import SizingCriterion, Status, evaluate, criterion
from . import friction, gas, piping, compressible, transmission, criteria
from . import properties
