"""dragdensity Quickstart: resolve a density from an NRLMSISE-00 install."""

import logging

from dragdensity import DragDensityResolver, ResolverConfig

logging.basicConfig(level=logging.INFO)

# Expects nrlmsise_test01 in the directory and DATA/SOLFSMY.TXT, DATA/apindex below it
config = ResolverConfig.from_model_directory("/opt/msis-model_c")
resolver = DragDensityResolver.from_config(config)

result = resolver.resolve_detailed(
    "15/03/2020 12:30:45.000000 UTC",
    {"lat": 51.64, "lon": -0.1275, "alt_km": 400.0},
)

print(f"Day of year: {result.day_info.day_of_year}")
print(f"F10.7:       {result.indices.f107}  (81-day {result.indices.f107a})")
print(f"Ap:          {result.indices.ap}")
print(f"Model out:   {result.raw_output!r}")
print(f"Density:     {result.density_kg_m3:.4e} kg/m^3")
for message in result.diagnostics:
    print(f"Note:        {message}")
