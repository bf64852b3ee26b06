"""Drag acceleration along a short list of geodetic states."""

from datetime import datetime, timedelta, timezone

from dragdensity import DragDensityResolver, DragForce, ResolverConfig

config = ResolverConfig.from_model_directory("/opt/msis-model_c")
force = DragForce.from_properties(
    DragDensityResolver.from_config(config),
    drag_coefficient=2.2,
    area_m2=1.0,
    mass_kg=150.0,
)

start = datetime(2020, 3, 15, 12, 0, 0, tzinfo=timezone.utc)
states = [
    # (lat, lon, alt_km), ECEF velocity m/s
    ((51.6, -0.1, 410.0), (7660.0, 0.0, 0.0)),
    ((45.2, 20.3, 408.5), (7200.0, 2600.0, 0.0)),
    ((30.1, 38.7, 406.9), (6400.0, 3900.0, 0.0)),
]

for i, (position, velocity) in enumerate(states):
    diagnostics: list[str] = []
    accel, rho = force.acceleration(start + timedelta(minutes=5 * i), position, velocity, diagnostics)
    print(f"{position}  rho={rho:.3e} kg/m^3  a={accel} m/s^2")
    for message in diagnostics:
        print(f"    {message}")
