from datetime import datetime, timezone

from orrery.core.frames import norm
from orrery.physics.epoch import julian_date
from orrery.simulation.catalog import build_solar_system
from orrery.simulation.engine import Engine
from orrery.simulation.systems.state_recorder import StateRecorderSystem
from orrery.visualization.export_log import export_log_to_json, export_orbit_paths
from orrery.visualization.plotly_viewer import render_static_scene

graph = build_solar_system()

t0 = julian_date(datetime(2024, 1, 1, tzinfo=timezone.utc))

print(f"Heliocentric distances at JD {t0:.1f}:")
for body_id, r in graph.absolute_positions(t0).items():
    print(f"  {body_id:8s} {norm(r):10.6f} au")

# One Earth year, daily ticks
engine = Engine(dt=1.0, systems=[StateRecorderSystem()])
log = engine.run(graph, t_start=t0, t_end=t0 + 365.25)

json_path = export_log_to_json(log, out_path="out/solar_system_log.json")
paths_path = export_orbit_paths(graph, out_path="out/solar_system_paths.json", t=t0)
scene_path = render_static_scene(graph, log, out_html="out/solar_system_scene.html")

print("Wrote:")
print(" -", json_path)
print(" -", paths_path)
print(" -", scene_path)
print("\nOpen the HTML file in your browser.")
