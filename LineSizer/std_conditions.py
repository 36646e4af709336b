from pint import UnitRegistry

# Configuring units package:
ureg = UnitRegistry(autoconvert_offset_to_baseunit=True)
Q_ = ureg.Quantity


# Setting units for "standard" flow
T_NTP = Q_(0, ureg.degC)  # Normal conditions (Nm3)
P_NTP = Q_(101325, ureg.Pa)  # Normal conditions (Nm3)

T_MSC = Q_(15, ureg.degC)  # Metric Standard Conditions (Crane TP-410)
P_MSC = Q_(101325, ureg.Pa)  # Metric Standard Conditions (Crane TP-410)

T_STD = Q_(60, ureg.degF)  # Gas industry base conditions (Sm3, MMSCFD)
P_STD = Q_(1.01325, ureg.bar)  # Gas industry base conditions (Sm3, MMSCFD)


def to_SI(value, unit):
    """Return magnitude of `value` in `unit`.

    Plain numbers are assumed to be already expressed in `unit`.
    """
    if isinstance(value, ureg.Quantity):
        return value.m_as(unit)
    return float(value)
