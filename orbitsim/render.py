"""GPU resources: shader programs, sphere meshes and the skybox."""

from __future__ import annotations

import sys
import warnings
from pathlib import Path
from typing import Any, Iterable

import numpy as np

from orbitsim.mesh import SphereMesh

SKYBOX_VERTICES = np.array(
    [
        -1.0, 1.0, -1.0, -1.0, -1.0, -1.0, 1.0, -1.0, -1.0,
        1.0, -1.0, -1.0, 1.0, 1.0, -1.0, -1.0, 1.0, -1.0,

        -1.0, -1.0, 1.0, -1.0, -1.0, -1.0, -1.0, 1.0, -1.0,
        -1.0, 1.0, -1.0, -1.0, 1.0, 1.0, -1.0, -1.0, 1.0,

        1.0, -1.0, -1.0, 1.0, -1.0, 1.0, 1.0, 1.0, 1.0,
        1.0, 1.0, 1.0, 1.0, 1.0, -1.0, 1.0, -1.0, -1.0,

        -1.0, -1.0, 1.0, -1.0, 1.0, 1.0, 1.0, 1.0, 1.0,
        1.0, 1.0, 1.0, 1.0, -1.0, 1.0, -1.0, -1.0, 1.0,

        -1.0, 1.0, -1.0, 1.0, 1.0, -1.0, 1.0, 1.0, 1.0,
        1.0, 1.0, 1.0, -1.0, 1.0, 1.0, -1.0, 1.0, -1.0,

        -1.0, -1.0, -1.0, -1.0, -1.0, 1.0, 1.0, -1.0, -1.0,
        1.0, -1.0, -1.0, -1.0, -1.0, 1.0, 1.0, -1.0, 1.0,
    ],
    dtype=np.float32,
).reshape(-1, 3)


def read_source(path) -> str:
    """Return the text of a shader source file."""
    return Path(path).read_text(encoding="utf-8")


def _uniform_value(value: Any):
    """Convert a Python or numpy value into what a GL uniform setter takes.

    Matrices are given row-major (``M @ v``) and sent column-major.
    """
    if isinstance(value, (bool, np.bool_)):
        return int(value)
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, (float, np.floating)):
        return float(value)
    array = np.asarray(value, dtype=np.float64)
    if array.ndim == 0:
        return float(array)
    if array.ndim == 1:
        return tuple(float(x) for x in array)
    if array.ndim == 2:
        return tuple(float(x) for x in array.flatten(order="F"))
    raise ValueError(f"cannot use an array of shape {array.shape} as a uniform")


def _rotation_only(view) -> np.ndarray:
    """Keep the rotation of a view matrix and drop its translation."""
    matrix = np.eye(4)
    matrix[:3, :3] = np.asarray(view, dtype=np.float64)[:3, :3]
    return matrix


def _compile(vertex_source: str, fragment_source: str):
    from pyglet.graphics.shader import Shader
    from pyglet.graphics.shader import ShaderProgram as GLProgram

    return GLProgram(Shader(vertex_source, "vertex"), Shader(fragment_source, "fragment"))


def _generate(gen_function) -> int:
    from pyglet import gl

    ids = (gl.GLuint * 1)()
    gen_function(1, ids)
    return int(ids[0])


def _release(delete_function, object_id: int) -> None:
    from pyglet import gl

    if object_id:
        delete_function(1, (gl.GLuint * 1)(object_id))


class ShaderProgram:
    """A linked vertex and fragment program with forgiving uniform setting."""

    def __init__(self, program) -> None:
        self._program = program
        self._missing: set[str] = set()

    @classmethod
    def from_files(cls, vertex_path, fragment_path) -> ShaderProgram:
        vertex_source = read_source(vertex_path)
        fragment_source = read_source(fragment_path)
        return cls(_compile(vertex_source, fragment_source))

    def use(self) -> None:
        self._program.use()

    def stop(self) -> None:
        self._program.stop()

    def set_uniform(self, name: str, value) -> None:
        """Set a uniform; a name the program lacks is warned about once and ignored."""
        if name not in self._program.uniforms:
            if name not in self._missing:
                self._missing.add(name)
                warnings.warn(f"uniform {name!r} doesn't exist", RuntimeWarning, stacklevel=2)
            return
        self._program[name] = _uniform_value(value)

    def delete(self) -> None:
        self._program.delete()


class SphereRenderer:
    """A sphere mesh uploaded to vertex and index buffers.

    Positions come first in the buffer, normals after them, as attributes 0 and 1.
    """

    def __init__(self, mesh: SphereMesh) -> None:
        from pyglet import gl

        self.index_count = mesh.index_count
        positions = np.ascontiguousarray(mesh.positions, dtype=np.float32)
        normals = np.ascontiguousarray(mesh.normals, dtype=np.float32)
        vertices = np.ascontiguousarray(np.concatenate([positions.ravel(), normals.ravel()]))
        indices = np.ascontiguousarray(mesh.indices, dtype=np.uint32)

        self._vao = _generate(gl.glGenVertexArrays)
        self._vbo = _generate(gl.glGenBuffers)
        self._ebo = _generate(gl.glGenBuffers)

        gl.glBindVertexArray(self._vao)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, self._vbo)
        gl.glBufferData(gl.GL_ARRAY_BUFFER, vertices.nbytes, vertices.ctypes.data, gl.GL_STATIC_DRAW)

        gl.glEnableVertexAttribArray(0)
        gl.glVertexAttribPointer(0, 3, gl.GL_FLOAT, gl.GL_FALSE, 0, 0)
        gl.glEnableVertexAttribArray(1)
        gl.glVertexAttribPointer(1, 3, gl.GL_FLOAT, gl.GL_FALSE, 0, positions.nbytes)

        gl.glBindBuffer(gl.GL_ELEMENT_ARRAY_BUFFER, self._ebo)
        gl.glBufferData(
            gl.GL_ELEMENT_ARRAY_BUFFER, indices.nbytes, indices.ctypes.data, gl.GL_STATIC_DRAW
        )
        gl.glBindVertexArray(0)

    def draw(self) -> None:
        from pyglet import gl

        gl.glBindVertexArray(self._vao)
        gl.glDrawElements(gl.GL_TRIANGLES, self.index_count, gl.GL_UNSIGNED_INT, 0)
        gl.glBindVertexArray(0)

    def delete(self) -> None:
        from pyglet import gl

        _release(gl.glDeleteVertexArrays, self._vao)
        _release(gl.glDeleteBuffers, self._vbo)
        _release(gl.glDeleteBuffers, self._ebo)
        self._vao = self._vbo = self._ebo = 0


def _load_cubemap(faces: Iterable) -> int:
    import pyglet
    from pyglet import gl
    from pyglet.image.codecs import ImageDecodeException

    texture = _generate(gl.glGenTextures)
    gl.glBindTexture(gl.GL_TEXTURE_CUBE_MAP, texture)

    for index, face in enumerate(faces):
        try:
            image = pyglet.image.load(str(face)).get_image_data()
        except (OSError, ImageDecodeException):
            print(f"Failed to load cubemap texture: {face}", file=sys.stderr)
            continue
        pixels = image.get_data("RGBA", -image.width * 4)
        gl.glTexImage2D(
            gl.GL_TEXTURE_CUBE_MAP_POSITIVE_X + index,
            0,
            gl.GL_RGB,
            image.width,
            image.height,
            0,
            gl.GL_RGBA,
            gl.GL_UNSIGNED_BYTE,
            pixels,
        )

    gl.glTexParameteri(gl.GL_TEXTURE_CUBE_MAP, gl.GL_TEXTURE_MIN_FILTER, gl.GL_LINEAR)
    gl.glTexParameteri(gl.GL_TEXTURE_CUBE_MAP, gl.GL_TEXTURE_MAG_FILTER, gl.GL_LINEAR)
    gl.glTexParameteri(gl.GL_TEXTURE_CUBE_MAP, gl.GL_TEXTURE_WRAP_S, gl.GL_CLAMP_TO_EDGE)
    gl.glTexParameteri(gl.GL_TEXTURE_CUBE_MAP, gl.GL_TEXTURE_WRAP_T, gl.GL_CLAMP_TO_EDGE)
    gl.glTexParameteri(gl.GL_TEXTURE_CUBE_MAP, gl.GL_TEXTURE_WRAP_R, gl.GL_CLAMP_TO_EDGE)
    return texture


class Skybox:
    """A cube-mapped background drawn behind everything else."""

    def __init__(self, faces, vertex_path, fragment_path) -> None:
        from pyglet import gl

        vertices = np.ascontiguousarray(SKYBOX_VERTICES)
        self._vertex_count = len(vertices)
        self._vao = _generate(gl.glGenVertexArrays)
        self._vbo = _generate(gl.glGenBuffers)

        gl.glBindVertexArray(self._vao)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, self._vbo)
        gl.glBufferData(gl.GL_ARRAY_BUFFER, vertices.nbytes, vertices.ctypes.data, gl.GL_STATIC_DRAW)
        gl.glEnableVertexAttribArray(0)
        gl.glVertexAttribPointer(0, 3, gl.GL_FLOAT, gl.GL_FALSE, 3 * vertices.itemsize, 0)
        gl.glBindVertexArray(0)

        self._texture = _load_cubemap(faces)
        self._shader = ShaderProgram.from_files(vertex_path, fragment_path)

    def draw(self, view, projection) -> None:
        from pyglet import gl

        gl.glDepthFunc(gl.GL_LEQUAL)
        self._shader.use()
        self._shader.set_uniform("u_View", _rotation_only(view))
        self._shader.set_uniform("u_Projection", projection)
        self._shader.set_uniform("u_Skybox", 0)

        gl.glBindVertexArray(self._vao)
        gl.glActiveTexture(gl.GL_TEXTURE0)
        gl.glBindTexture(gl.GL_TEXTURE_CUBE_MAP, self._texture)
        gl.glDrawArrays(gl.GL_TRIANGLES, 0, self._vertex_count)
        gl.glBindVertexArray(0)
        gl.glDepthFunc(gl.GL_LESS)

    def delete(self) -> None:
        from pyglet import gl

        _release(gl.glDeleteVertexArrays, self._vao)
        _release(gl.glDeleteBuffers, self._vbo)
        _release(gl.glDeleteTextures, self._texture)
        self._shader.delete()
        self._vao = self._vbo = self._texture = 0