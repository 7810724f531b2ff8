# orbitsim

An interactive, real-time 3D gravity simulation. A massive sun sits at the
centre of a small planetary system, and every body pulls on every other with
Newtonian gravity. Bodies that touch are pushed apart and bounce off each
other. You can add planets, change the gravity strength and the time scale,
and orbit the camera around the system.

## Installation

```
pip install .
```

Opening the window needs an OpenGL driver. The physics, camera and mesh
modules need only numpy.

## Running

```
orbitsim [--title TITLE] [--width W] [--height H] [--assets DIR] [--seed N]
```

| Option     | Default            | Meaning                                        |
|------------|--------------------|------------------------------------------------|
| `--title`  | `Space Simulation` | window title                                   |
| `--width`  | `1920`             | window width (positive integer)                |
| `--height` | `1080`             | window height (positive integer)               |
| `--assets` | `..`               | directory holding the `Shaders` and `Assets` folders |
| `--seed`   | none               | seed for the random numbers used by new planets |

The window is maximised once it opens. A text overlay in the top-left corner
shows the number of bodies, whether the simulation is paused, the current
gravity strength and time scale, and a summary of the controls.

### Files read from the asset directory

- `Shaders/Lighting.vert` and `Shaders/Lighting.frag`: the program that draws
  each body. It is given the uniforms `u_Color`, `u_Model`, `u_View`,
  `u_Projection`, `u_LightPos`, `u_LightColor`, `u_AmbientStrength`, `u_Time`
  and `u_IsSun`.
- `Shaders/Skybox.vert` and `Shaders/Skybox.frag`: the background program,
  given `u_View` (rotation only), `u_Projection` and `u_Skybox`.
- `Assets/Textures/Skybox/{right,left,top,bottom,front,back}.png`: the six
  cube-map faces. A face that cannot be loaded is reported on standard error
  and skipped.
- `Assets/Branding/sockenginelogo.png`: the window icon, used if present.

A uniform the shader program does not declare is warned about once
(`RuntimeWarning`) and otherwise ignored.

### Keyboard

| Key         | Action                                          |
|-------------|-------------------------------------------------|
| Space       | Pause / resume simulation                       |
| R           | Reset to the sun and five starting planets      |
| A           | Add a random planet                             |
| P           | Add a planet at distance 8, angle 0, radius 0.3 |
| Right/Left  | Gravity strength up/down by 0.25 (0 to 5)       |
| Up/Down     | Time scale up/down by 0.25 (0 to 5)             |
| 1 / 2 / 3   | Top / side / angled camera view                 |
| Escape      | Quit                                            |

Each key acts once per press; holding it down does not repeat.

### Mouse

- Drag with the left button to rotate the camera. The pitch stays within
  0.1 radians of straight up or down.
- Scroll to zoom. The camera distance stays between 5 and 50.

## Using the simulation from Python

The physics does not depend on the window:

```python
import random
from orbitsim.simulation import GravitySimulation

sim = GravitySimulation(random.Random(1))   # starts with the sun and five planets
sim.add_planet_with_params(8.0, 0.0, 0.3, (0.5, 0.5, 0.9, 1.0))
sim.add_random_planet()
for _ in range(600):
    sim.update(1 / 60, 1.0)                 # time step, gravity strength
print(len(sim), "bodies")
print(sim.light_position)                   # position of the sun, bodies[0]
```

- `orbitsim.simulation.GravitySimulation` holds `bodies` (the first is always
  the sun, mass 1000, radius 1.5) and an accumulated `time`. `update` moves
  every body under gravity, then resolves each colliding pair.
  `random_orbit_parameters` returns an `OrbitParameters` with a distance
  between 3 and 15 and the matching circular-orbit speed. `reset` restores
  the starting system. `add_planet_with_params` raises `ValueError` for a
  distance that is not positive.
- `orbitsim.body.CelestialBody` holds a body's radius, colour, position,
  velocity and mass. Its `update` applies gravity from every other body more
  than 0.1 away. `check_collision` and `resolve_collision` detect overlap and
  apply an impulse with restitution 0.8. `mesh` is its sphere mesh, with
  `mesh_detail()` bands in each direction (between 10 and 30).
- `orbitsim.mesh.generate_sphere(radius, latitude_bands, longitude_bands)`
  returns a `SphereMesh` with positions, unit normals and triangle indices.
  `interleaved()` returns position and normal per vertex as one array.
- `orbitsim.camera.OrbitCamera` turns mouse and scroll input into a camera
  position and `view_matrix()` / `projection_matrix(aspect)`. `apply_preset`
  takes a `CameraPreset`: `TOP_VIEW`, `SIDE_VIEW` or `ANGLED_VIEW`. The
  helpers `look_at`, `perspective` and `translation` build 4x4 matrices in
  row-major form.
- `orbitsim.app` has `ControlState` (gravity strength, time scale, pause and
  the custom-planet settings), `KeyLatch` (one action per key press) and
  `Application`, whose `update(delta_time)` steps the simulation unless it is
  paused and whose `run()` opens the window.

## What it does not do

- It does not include the shader or texture files; they must be supplied in
  the asset directory.
- There are no on-screen sliders or buttons. Settings are changed from the
  keyboard, and the custom planet's distance, angle, size and colour are
  set only through `Application.controls` from Python.
- Simulation state is not saved or loaded.

## Tests

```
pip install .[test]
pytest
```