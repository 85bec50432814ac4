from concurrent.futures import ThreadPoolExecutor

import numpy as np

from hydrogenHandler import generateCloud
from orbitals import SimulationConfig


class CloudCache:
    """
    Point clouds for the currently selected orbitals.

    Clouds are sampled when an orbital is first selected and again whenever
    the point count changes. Opacity and the other display settings never
    trigger resampling; the renderer reads `opacity` and applies it to its
    materials.
    """

    def __init__(self, seed=None, workers=None, **sampleKw):
        self._seeds = np.random.SeedSequence(seed)
        self._workers = workers
        self._sampleKw = sampleKw
        self.clouds = {}
        self.config = None
        self.generations = 0

    @property
    def opacity(self):
        return self.config.opacity if self.config is not None else SimulationConfig().opacity

    def _sample(self, orbitals, config):
        # one independent stream per sampling run
        rngs = [np.random.default_rng(s) for s in self._seeds.spawn(len(orbitals))]
        jobs = list(zip(orbitals, rngs))
        if len(jobs) <= 1 or self._workers == 1:
            clouds = [generateCloud(o, config, rng, **self._sampleKw) for o, rng in jobs]
        else:
            with ThreadPoolExecutor(max_workers=self._workers) as pool:
                clouds = list(pool.map(
                    lambda job: generateCloud(job[0], config, job[1], **self._sampleKw), jobs))
        self.generations += len(clouds)
        return {o.id: cloud for o, cloud in zip(orbitals, clouds)}

    def update(self, selected, config):
        """Bring the cache in line with `selected`; return {orbital id: PointCloud}."""
        selectedIds = {o.id for o in selected}
        for orbitalId in list(self.clouds):
            if orbitalId not in selectedIds:
                del self.clouds[orbitalId]

        if self.config is not None and self.config.isStructuralChange(config):
            stale = list(selected)
        else:
            stale = [o for o in selected if o.id not in self.clouds]
        self.config = config

        if stale:
            self.clouds.update(self._sample(stale, config))
        return {o.id: self.clouds[o.id] for o in selected}

    def clear(self):
        self.clouds.clear()
