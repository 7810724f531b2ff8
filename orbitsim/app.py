"""The interactive window: input handling, stepping and drawing."""

from __future__ import annotations

import argparse
import random
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from orbitsim.body import CelestialBody, Color
from orbitsim.camera import ANGLED_VIEW, SIDE_VIEW, TOP_VIEW, OrbitCamera, translation
from orbitsim.simulation import GravitySimulation

DEFAULT_TITLE = "Space Simulation"
DEFAULT_WIDTH = 1920
DEFAULT_HEIGHT = 1080
PARAMETER_MIN = 0.0
PARAMETER_MAX = 5.0
PARAMETER_STEP = 0.25
LIGHT_COLOR = (1.0, 1.0, 1.0)
AMBIENT_STRENGTH = 0.3
SKYBOX_FACE_NAMES = ("right", "left", "top", "bottom", "front", "back")

HELP_TEXT = (
    "Space: pause/resume   R: reset   A: random planet   P: custom planet\n"
    "Left/Right: gravity   Up/Down: time scale   1/2/3: top/side/angled view\n"
    "Drag with the left button to rotate, scroll to zoom, Escape to exit"
)


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


@dataclass
class ControlState:
    """User-adjustable simulation settings."""

    gravity_strength: float = 1.0
    time_scale: float = 1.0
    paused: bool = False
    new_planet_distance: float = 8.0
    new_planet_angle: float = 0.0
    new_planet_radius: float = 0.3
    new_planet_color: Color = (0.5, 0.5, 0.9, 1.0)

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        return self.paused

    def reset_parameters(self) -> None:
        self.gravity_strength = 1.0
        self.time_scale = 1.0

    def scaled_delta(self, delta_time: float) -> float:
        return delta_time * self.time_scale


@dataclass
class KeyLatch:
    """Turns a held key into a single press."""

    held: bool = False

    def pressed(self, is_down: bool) -> bool:
        """Report True only on the poll where the key goes down."""
        fired = is_down and not self.held
        self.held = is_down
        return fired


class Application:
    """Owns the simulation, the camera and the window that shows them."""

    def __init__(
        self,
        title: str = DEFAULT_TITLE,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        *,
        simulation: GravitySimulation | None = None,
        asset_root: Path | str = Path(".."),
    ) -> None:
        self.title = title
        self.width = width
        self.height = height
        self.simulation = simulation if simulation is not None else GravitySimulation()
        self.camera = OrbitCamera()
        self.controls = ControlState()
        self.asset_root = Path(asset_root)
        self._actions: dict[str, Callable[[], object]] = {
            "pause": self.controls.toggle_pause,
            "reset": self.simulation.reset,
            "add_random": self.simulation.add_random_planet,
            "add_custom": self._add_custom_planet,
            "top_view": lambda: self.camera.apply_preset(TOP_VIEW),
            "side_view": lambda: self.camera.apply_preset(SIDE_VIEW),
            "angled_view": lambda: self.camera.apply_preset(ANGLED_VIEW),
            "faster": lambda: self._adjust("time_scale", PARAMETER_STEP),
            "slower": lambda: self._adjust("time_scale", -PARAMETER_STEP),
            "stronger": lambda: self._adjust("gravity_strength", PARAMETER_STEP),
            "weaker": lambda: self._adjust("gravity_strength", -PARAMETER_STEP),
        }
        self._latches = {name: KeyLatch() for name in self._actions}
        self._renderers: dict[int, tuple[CelestialBody, object]] = {}

    def update(self, delta_time: float) -> None:
        if not self.controls.paused:
            self.simulation.update(
                self.controls.scaled_delta(delta_time), self.controls.gravity_strength
            )

    def _adjust(self, name: str, step: float) -> None:
        value = getattr(self.controls, name) + step
        setattr(self.controls, name, _clamp(value, PARAMETER_MIN, PARAMETER_MAX))

    def _add_custom_planet(self) -> CelestialBody:
        c = self.controls
        return self.simulation.add_planet_with_params(
            c.new_planet_distance, c.new_planet_angle, c.new_planet_radius, c.new_planet_color
        )

    def _handle_keys(self, is_down: Callable[[str], bool]) -> None:
        for name, latch in self._latches.items():
            if latch.pressed(is_down(name)):
                self._actions[name]()

    def _status_text(self) -> str:
        state = "Paused" if self.controls.paused else "Running"
        return (
            f"Bodies: {len(self.simulation)}   {state}\n"
            f"Gravity strength: {self.controls.gravity_strength:.2f}   "
            f"Time scale: {self.controls.time_scale:.2f}\n"
            f"{HELP_TEXT}"
        )

    def _shader_path(self, name: str) -> Path:
        return self.asset_root / "Shaders" / name

    def _skybox_faces(self) -> list[Path]:
        folder = self.asset_root / "Assets" / "Textures" / "Skybox"
        return [folder / f"{name}.png" for name in SKYBOX_FACE_NAMES]

    def _renderer_for(self, body: CelestialBody, renderer_type):
        entry = self._renderers.get(id(body))
        if entry is None or entry[0] is not body:
            entry = (body, renderer_type(body.mesh))
            self._renderers[id(body)] = entry
        return entry[1]

    def _prune_renderers(self) -> None:
        live = {id(body) for body in self.simulation.bodies}
        for key in [k for k in self._renderers if k not in live]:
            _, renderer = self._renderers.pop(key)
            renderer.delete()

    def _create_window(self):
        import pyglet
        from pyglet import gl
        from pyglet.image.codecs import ImageDecodeException

        config = gl.Config(
            major_version=4,
            minor_version=6,
            forward_compatible=True,
            double_buffer=True,
            depth_size=24,
            sample_buffers=1,
            samples=4,
        )
        try:
            window = pyglet.window.Window(
                self.width, self.height, self.title, resizable=True, config=config
            )
        except pyglet.window.NoSuchConfigException:
            window = pyglet.window.Window(self.width, self.height, self.title, resizable=True)
        window.maximize()

        icon = self.asset_root / "Assets" / "Branding" / "sockenginelogo.png"
        try:
            window.set_icon(pyglet.image.load(str(icon)))
        except (OSError, ImageDecodeException):
            pass

        gl.glEnable(gl.GL_DEPTH_TEST)
        gl.glEnable(gl.GL_MULTISAMPLE)
        return window

    def run(self) -> None:
        """Open the window and run until it is closed."""
        import pyglet
        from pyglet import gl
        from pyglet.window import key, mouse

        from orbitsim.render import ShaderProgram, Skybox, SphereRenderer

        window = self._create_window()
        shader = ShaderProgram.from_files(
            self._shader_path("Lighting.vert"), self._shader_path("Lighting.frag")
        )
        skybox = Skybox(
            self._skybox_faces(),
            self._shader_path("Skybox.vert"),
            self._shader_path("Skybox.frag"),
        )
        label = pyglet.text.Label(
            "", x=10, y=window.height - 10, anchor_y="top", multiline=True, width=640,
            font_size=11,
        )

        keys = key.KeyStateHandler()
        window.push_handlers(keys)
        bindings = {
            "pause": key.SPACE,
            "reset": key.R,
            "add_random": key.A,
            "add_custom": key.P,
            "top_view": key._1,
            "side_view": key._2,
            "angled_view": key._3,
            "faster": key.UP,
            "slower": key.DOWN,
            "stronger": key.RIGHT,
            "weaker": key.LEFT,
        }

        @window.event
        def on_mouse_press(x, y, button, modifiers):
            if button == mouse.LEFT:
                self.camera.on_mouse_button(True)

        @window.event
        def on_mouse_release(x, y, button, modifiers):
            if button == mouse.LEFT:
                self.camera.on_mouse_button(False)

        @window.event
        def on_mouse_motion(x, y, dx, dy):
            self.camera.on_mouse_move(x, window.height - y)

        @window.event
        def on_mouse_drag(x, y, dx, dy, buttons, modifiers):
            self.camera.on_mouse_move(x, window.height - y)

        @window.event
        def on_mouse_scroll(x, y, scroll_x, scroll_y):
            self.camera.on_scroll(scroll_y)

        @window.event
        def on_draw():
            gl.glClearColor(0.0, 0.0, 0.0, 1.0)
            window.clear()
            gl.glEnable(gl.GL_DEPTH_TEST)

            aspect = window.width / max(window.height, 1)
            view = self.camera.view_matrix()
            projection = self.camera.projection_matrix(aspect)
            skybox.draw(view, projection)

            self._prune_renderers()
            light = self.simulation.light_position
            for index, body in enumerate(self.simulation.bodies):
                shader.use()
                shader.set_uniform("u_Color", body.color)
                shader.set_uniform("u_Model", translation(body.position))
                shader.set_uniform("u_View", view)
                shader.set_uniform("u_Projection", projection)
                shader.set_uniform("u_LightPos", light)
                shader.set_uniform("u_LightColor", LIGHT_COLOR)
                shader.set_uniform("u_AmbientStrength", AMBIENT_STRENGTH)
                shader.set_uniform("u_Time", self.simulation.time)
                shader.set_uniform("u_IsSun", index == 0)
                self._renderer_for(body, SphereRenderer).draw()
            shader.stop()

            gl.glDisable(gl.GL_DEPTH_TEST)
            label.text = self._status_text()
            label.y = window.height - 10
            label.draw()
            gl.glEnable(gl.GL_DEPTH_TEST)

        def tick(delta_time):
            self._handle_keys(lambda name: bool(keys[bindings[name]]))
            self.update(delta_time)

        pyglet.clock.schedule(tick)
        try:
            pyglet.app.run()
        finally:
            pyglet.clock.unschedule(tick)
            for _, renderer in self._renderers.values():
                renderer.delete()
            self._renderers.clear()
            skybox.delete()
            shader.delete()


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return value


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="orbitsim", description="Interactive gravity simulation of a small solar system."
    )
    parser.add_argument("--title", default=DEFAULT_TITLE, help="window title")
    parser.add_argument("--width", type=_positive_int, default=DEFAULT_WIDTH)
    parser.add_argument("--height", type=_positive_int, default=DEFAULT_HEIGHT)
    parser.add_argument(
        "--assets",
        type=Path,
        default=Path(".."),
        help="directory holding the Shaders and Assets folders",
    )
    parser.add_argument("--seed", type=int, help="seed for random planets")
    args = parser.parse_args(argv)

    simulation = GravitySimulation(random.Random(args.seed)) if args.seed is not None else None
    app = Application(
        args.title, args.width, args.height, simulation=simulation, asset_root=args.assets
    )
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())