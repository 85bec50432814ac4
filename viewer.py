import numpy as np
from colorama import Fore, Style

from cloudCache import CloudCache
from orbitals import IRON_ORBITALS, POINT_COUNT_RANGE, OPACITY_RANGE, SimulationConfig, findOrbital, validateOrbital

# Uncomment/Comment any below as needed

selected_ids = ['1s']                   # e.g. ['2px', '2py', '2pz'] or ['3dxy', '3dz2']
config = SimulationConfig(pointCount=40000, opacity=1.0, autoRotate=True)
point_size = 4
seed = None                             # set an int for a reproducible cloud


def buildPointsMesh(cloud):
    """Turn a PointCloud into a pyvista PolyData carrying an 'rgb' point array."""
    import pyvista as pv
    mesh = pv.PolyData(np.asarray(cloud.positions, dtype=np.float32))
    mesh.point_data['rgb'] = (np.clip(cloud.colors, 0.0, 1.0) * 255).astype(np.uint8)
    return mesh


class OrbitalScene:
    """
    Keeps one points actor per selected orbital on a pyvista plotter.

    The plotter is passed in by the caller. Opacity changes only touch
    actor properties; point-count or selection changes go through the
    CloudCache, which resamples what it has to.
    """

    def __init__(self, plotter, config=None, cache=None, pointSize=point_size):
        self.plotter = plotter
        self.config = config or SimulationConfig()
        self.cache = cache or CloudCache()
        self.pointSize = pointSize
        self.selected = []
        self.actors = {}
        self.shown = {}

    def _sync(self):
        clouds = self.cache.update(self.selected, self.config)
        for orbitalId in list(self.shown):
            if orbitalId not in clouds:
                del self.shown[orbitalId]
                if orbitalId in self.actors:
                    self.plotter.remove_actor(self.actors.pop(orbitalId))
        for orbitalId, cloud in clouds.items():
            actor = self.actors.get(orbitalId)
            if self.shown.get(orbitalId) is cloud:
                if actor is not None:
                    actor.prop.opacity = self.config.opacity
                continue
            if actor is not None:
                self.plotter.remove_actor(self.actors.pop(orbitalId))
            self.shown[orbitalId] = cloud
            if len(cloud) == 0:
                print(f"{Fore.YELLOW}Warning: no points accepted for '{orbitalId}'.{Style.RESET_ALL}")
                continue
            actor = self.plotter.add_mesh(
                buildPointsMesh(cloud),
                scalars='rgb',
                rgb=True,
                style='points',
                point_size=self.pointSize,
                opacity=self.config.opacity,
                name=orbitalId,
            )
            self.actors[orbitalId] = actor
        self.updateHud()
        self.plotter.render()

    def select(self, orbitalIds):
        self.selected = [validateOrbital(findOrbital(i), verbose=True) for i in orbitalIds]
        self._sync()

    def toggle(self, orbitalId):
        ids = [o.id for o in self.selected]
        if orbitalId in ids:
            ids.remove(orbitalId)
        else:
            ids.append(orbitalId)
        self.select(ids)

    def setOpacity(self, opacity):
        lo, hi = OPACITY_RANGE
        self.config = self.config.replace(opacity=min(max(opacity, lo), hi))
        self._sync()

    def setPointCount(self, pointCount):
        lo, hi = POINT_COUNT_RANGE
        self.config = self.config.replace(pointCount=int(min(max(pointCount, lo), hi)))
        self._sync()

    def updateHud(self):
        labels = ", ".join(o.label for o in self.selected) or "none"
        counts = sum(len(self.cache.clouds[o.id]) for o in self.selected if o.id in self.cache.clouds)
        hud_text = f"Orbitals: {labels}\n" \
                   f"Points: {counts} (target {self.config.pointCount} each)\n" \
                   f"Opacity: {self.config.opacity:.2f}"
        self.plotter.add_text(hud_text, position='upper_left', font_size=12, name='hud')


def main():
    import pyvista as pv

    pl = pv.Plotter(window_size=(1100, 900))
    pl.set_background('black')
    pl.add_axes(xlabel='X', ylabel='Y', zlabel='Z', line_width=2)

    scene = OrbitalScene(pl, config=config, cache=CloudCache(seed=seed, progress=True, verbose=True))
    scene.select(selected_ids)

    pl.add_key_event('Up', lambda: scene.setOpacity(scene.config.opacity + 0.1))
    pl.add_key_event('Down', lambda: scene.setOpacity(scene.config.opacity - 0.1))
    pl.add_key_event('plus', lambda: scene.setPointCount(scene.config.pointCount + 5000))
    pl.add_key_event('minus', lambda: scene.setPointCount(scene.config.pointCount - 5000))
    for key, orbital in zip('1234567890', IRON_ORBITALS):
        pl.add_key_event(key, lambda orbitalId=orbital.id: scene.toggle(orbitalId))

    # Camera orbit, paused/resumed with SPACE
    path = pl.generate_orbital_path(n_points=180, factor=2.5).points
    toggle = {'run': config.autoRotate}
    frame = {'idx': 0}

    def tick(_=None):
        if toggle['run']:
            pl.camera.position = path[frame['idx'] % len(path)]
            frame['idx'] += 1

    pl.add_key_event('space', lambda: toggle.update(run=not toggle['run']))
    if hasattr(pl, "add_timer_callback"):
        pl.add_timer_callback(callback=tick, interval=40)
    elif hasattr(pl, "add_on_render_callback"):
        pl.add_on_render_callback(tick)
    else:
        print(f"{Fore.YELLOW}No animation callback possible with this PyVista version.{Style.RESET_ALL}")

    pl.add_text("UP/DOWN = opacity, +/- = points, 1-0 = toggle orbitals, SPACE = orbit",
                position='lower_left', font_size=11)
    pl.show()


if __name__ == "__main__":
    main()
