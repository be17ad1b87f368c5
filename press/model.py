from collections import namedtuple

# 1 N/cm^2 = 10,000 N/m^2 = 10 kPa
KPA_PER_N_CM2 = 10.0

PressureReading = namedtuple("PressureReading", ["pressure", "output_force"])


def compute(input_force, input_area, output_area, conversion=KPA_PER_N_CM2):
    """
    Pascal's Law over two connected cylinders.

    Forces are in N, areas in cm^2. Returns the fluid pressure in kPa and the
    force on the output piston in N. Areas are expected to be kept strictly
    positive by the control ranges.
    """
    pressure_n_cm2 = input_force / input_area
    return PressureReading(
        pressure=pressure_n_cm2 * conversion,
        output_force=pressure_n_cm2 * output_area,
    )


def mechanical_advantage(input_area, output_area):
    return output_area / input_area


def provides_advantage(input_area, output_area):
    """False when the output piston is no larger than the input piston."""
    return input_area < output_area
