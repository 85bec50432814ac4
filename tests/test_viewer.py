import numpy as np
import pytest

pv = pytest.importorskip("pyvista")

from cloudCache import CloudCache
from hydrogenHandler import sampleOrbitalCloud
from orbitals import SimulationConfig
from viewer import buildPointsMesh, OrbitalScene


class FakeProp:
    opacity = None


class FakeActor:
    def __init__(self, mesh, opacity):
        self.mesh = mesh
        self.prop = FakeProp()
        self.prop.opacity = opacity


class FakePlotter:
    def __init__(self):
        self.added = []
        self.removed = []
        self.texts = {}

    def add_mesh(self, mesh, opacity=1.0, **kwargs):
        actor = FakeActor(mesh, opacity)
        self.added.append(actor)
        return actor

    def remove_actor(self, actor):
        self.removed.append(actor)

    def add_text(self, text, name=None, **kwargs):
        self.texts[name] = text

    def render(self):
        pass


def test_build_points_mesh():
    cloud = sampleOrbitalCloud(2, 0, 0, 250, color=(0.0, 1.0, 0.5), rng=np.random.default_rng(0))
    mesh = buildPointsMesh(cloud)
    assert isinstance(mesh, pv.PolyData)
    assert mesh.n_points == len(cloud)
    rgb = mesh.point_data['rgb']
    assert rgb.dtype == np.uint8
    assert rgb.shape == (len(cloud), 3)
    assert np.all(rgb[:, 0] == 0)


def test_opacity_updates_actor_without_resampling():
    plotter = FakePlotter()
    scene = OrbitalScene(plotter, config=SimulationConfig(pointCount=5000), cache=CloudCache(seed=0))
    scene.select(['2s', '2pz'])
    assert len(plotter.added) == 2
    generations = scene.cache.generations

    scene.setOpacity(0.4)
    assert len(plotter.added) == 2
    assert scene.cache.generations == generations
    assert all(actor.prop.opacity == pytest.approx(0.4) for actor in scene.actors.values())
    assert "Opacity: 0.40" in plotter.texts['hud']


def test_point_count_change_replaces_actors():
    plotter = FakePlotter()
    scene = OrbitalScene(plotter, config=SimulationConfig(pointCount=5000), cache=CloudCache(seed=0))
    scene.select(['2s'])
    scene.setPointCount(10000)
    assert len(plotter.added) == 2
    assert len(plotter.removed) == 1
    assert scene.config.pointCount == 10000


def test_toggle_removes_deselected_orbital():
    plotter = FakePlotter()
    scene = OrbitalScene(plotter, config=SimulationConfig(pointCount=5000), cache=CloudCache(seed=0))
    scene.select(['2s', '2px'])
    scene.toggle('2px')
    assert list(scene.actors) == ['2s']
    assert len(plotter.removed) == 1


def test_sliders_are_clamped():
    plotter = FakePlotter()
    scene = OrbitalScene(plotter, config=SimulationConfig(pointCount=5000), cache=CloudCache(seed=0))
    scene.setOpacity(9.0)
    assert scene.config.opacity == 1.5
    scene.setPointCount(10)
    assert scene.config.pointCount == 5000
