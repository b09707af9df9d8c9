import numpy as np
import pytest

from latticenoise.config import (InvalidArgument, OctaveSpec, RepeatPeriod,
                                 SampleRequest)
from latticenoise.evaluator import NoiseEvaluator
from latticenoise.lattice import PermutationTable
from latticenoise.sampler import BatchSampler, stepCoordinates


@pytest.fixture
def sampler():
    return BatchSampler(NoiseEvaluator(PermutationTable(seed=23)))


@pytest.fixture
def request_():
    return SampleRequest(start=(0.1, -2.3, 7.77),
                         delta=(0.37, 0.0, -0.113),
                         count=257,
                         repeat=RepeatPeriod(6, 0, 0),
                         octaves=OctaveSpec(3, 0.5))


def test_step_coordinates_use_absolute_index():
    req = SampleRequest(start=(1.0, 2.0, 3.0), delta=(0.5, -1.0, 0.0),
                        count=4)
    x, y, z = stepCoordinates(req)
    assert x.tolist() == [1.0, 1.5, 2.0, 2.5]
    assert y.tolist() == [2.0, 1.0, 0.0, -1.0]
    assert z.tolist() == [3.0, 3.0, 3.0, 3.0]
    x, _, _ = stepCoordinates(req, 2, 4)
    assert x.tolist() == [2.0, 2.5]


def test_sample_matches_single_evaluation(sampler, request_):
    out = sampler.sample(request_)
    ev = sampler.evaluator
    (sx, sy, sz), (dx, dy, dz) = request_.start, request_.delta
    assert out.shape == (request_.count,)
    for i in range(request_.count):
        assert out[i] == ev.evaluate(sx + i * dx, sy + i * dy, sz + i * dz,
                                     request_.repeat, request_.octaves)


def test_sample_is_reproducible(sampler, request_):
    assert np.array_equal(sampler.sample(request_), sampler.sample(request_))


def test_empty_request(sampler):
    req = SampleRequest(start=(0.0, 0.0, 0.0), delta=(1.0, 1.0, 1.0),
                        count=0, octaves=OctaveSpec(5, 0.5))
    assert sampler.sample(req).shape == (0,)
    assert list(sampler.iterate(req)) == []
    assert sampler.sampleParallel(req, workers=3).shape == (0,)


@pytest.mark.parametrize("chunkSize", [1, 7, 256, 10000])
def test_iterate_matches_sample(sampler, request_, chunkSize):
    lazy = list(sampler.iterate(request_, chunkSize=chunkSize))
    assert lazy == sampler.sample(request_).tolist()


def test_iterate_restarts(sampler, request_):
    assert list(sampler.iterate(request_)) == list(sampler.iterate(request_))


@pytest.mark.parametrize("workers,chunkSize", [
    (1, None), (2, None), (4, 1), (3, 50), (8, 1000),
])
def test_parallel_matches_sample(sampler, request_, workers, chunkSize):
    par = sampler.sampleParallel(request_, workers=workers, chunkSize=chunkSize)
    assert np.array_equal(par, sampler.sample(request_))


@pytest.mark.parametrize("kwargs", [
    {"workers": 0}, {"workers": -2}, {"chunkSize": 0}, {"workers": 1.5},
])
def test_parallel_rejects_bad_options(sampler, request_, kwargs):
    with pytest.raises(InvalidArgument):
        sampler.sampleParallel(request_, **kwargs)


def test_iterate_rejects_bad_chunk_immediately(sampler, request_):
    with pytest.raises(InvalidArgument):
        sampler.iterate(request_, chunkSize=0)
