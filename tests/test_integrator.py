import math

import numpy as np
import pytest

from eulersim import (COS_FORCING, ConfigurationError, DivergenceError, EulerIntegrator, RunConfig,
                      ScalarODE, cos_forcing_exact, cos_forcing_rhs)


@pytest.fixture
def default_scope():
    return EulerIntegrator().run(RunConfig())


def test_problem_functions():
    assert cos_forcing_rhs(0.0, 1.0) == 0.0
    assert cos_forcing_exact(0.0) == 1.0
    assert cos_forcing_rhs(math.pi, 0.0) == pytest.approx(-1.0)
    assert isinstance(cos_forcing_exact(1.0), float)


def test_exact_solution_satisfies_ode():
    # Central difference of the exact solution matches the right-hand side
    eps = 1e-6
    for t in np.linspace(0.0, 5.0, 11):
        dydt = (cos_forcing_exact(t + eps) - cos_forcing_exact(t - eps)) / (2 * eps)
        assert dydt == pytest.approx(cos_forcing_rhs(t, cos_forcing_exact(t)), abs=1e-6)


def test_sample_count(default_scope):
    assert len(default_scope) == 1001
    assert default_scope.stats.sample_count == 1001
    assert default_scope.stats.total_steps == 1000


def test_first_two_samples(default_scope):
    first, second = default_scope[0], default_scope[1]
    assert first.as_row() == (0.0, 1.0, 1.0, 0.0)
    assert second.t == 0.005
    assert second.approx_y == 1.0


def test_time_is_arithmetic_progression(default_scope):
    t = default_scope.get_signal("t")
    h = default_scope.config.step_size
    np.testing.assert_allclose(t, h * np.arange(1001), rtol=0, atol=1e-9)
    assert t[-1] == pytest.approx(5.0, abs=1e-9)
    assert np.all(np.diff(t) > 0)


def test_error_column(default_scope):
    for s in default_scope:
        assert s.error == abs(s.exact_y - s.approx_y)
        assert s.error >= 0.0


def test_euler_step_relation(default_scope):
    h = default_scope.config.step_size
    samples = default_scope.samples
    for prev, cur in zip(samples, samples[1:]):
        expected = prev.approx_y + h * cos_forcing_rhs(prev.t, prev.approx_y)
        assert cur.approx_y == pytest.approx(expected, rel=1e-9)


def test_exact_column_matches_exact_solution(default_scope):
    t = default_scope.get_signal("t")
    expected = 0.5 * (np.cos(t) + np.sin(t)) + 0.5 * np.exp(-t)
    np.testing.assert_allclose(default_scope.get_signal("exact_y"), expected, rtol=1e-12)


def test_runs_are_bit_identical():
    first = EulerIntegrator().run(RunConfig()).samples
    second = EulerIntegrator().run(RunConfig()).samples
    assert first == second


def test_single_step_hits_both_ends():
    scope = EulerIntegrator().run(RunConfig(step_count=1))
    assert len(scope) == 2
    assert scope[0].t == 0.0
    assert scope[1].t == 5.0
    # f(0, 1) = 0 so a single step leaves y unchanged
    assert scope[1].approx_y == 1.0


def test_nonzero_start_time():
    config = RunConfig(start_time=1.0, end_time=3.0, step_count=4, initial_value=0.5)
    scope = EulerIntegrator().run(config)
    np.testing.assert_allclose(scope.get_signal("t"), [1.0, 1.5, 2.0, 2.5, 3.0])
    assert scope[0].approx_y == 0.5


def test_iter_samples_is_lazy_and_matches_run():
    config = RunConfig(step_count=50)
    integrator = EulerIntegrator()
    samples = integrator.iter_samples(config)
    assert next(samples).t == 0.0
    assert [s for s in integrator.iter_samples(config)] == list(integrator.run(config).samples)


def test_first_order_convergence():
    integrator = EulerIntegrator()
    coarse = integrator.run(RunConfig(step_count=1000)).final_error()
    fine = integrator.run(RunConfig(step_count=2000)).final_error()
    assert fine < coarse
    assert 1.5 < coarse / fine < 2.5


def test_custom_ode():
    decay = ScalarODE(rhs=lambda t, y: -y, exact_solution=lambda t: math.exp(-t), name="decay")
    scope = EulerIntegrator(decay).run(RunConfig(end_time=1.0, step_count=10))
    assert scope[-1].approx_y == pytest.approx(0.9 ** 10)
    assert scope[-1].exact_y == pytest.approx(math.exp(-1.0))


def test_default_ode_is_cos_forcing():
    assert EulerIntegrator().ode is COS_FORCING


def test_y_bounds_cover_both_series(default_scope):
    y_min, y_max = default_scope.y_bounds()
    for s in default_scope:
        assert y_min <= s.approx_y <= y_max
        assert y_min <= s.exact_y <= y_max


def test_stats(default_scope):
    stats = default_scope.stats
    assert stats.step_size == 0.005
    assert stats.max_error == max(default_scope.get_signal("error"))
    assert stats.final_error == default_scope[-1].error
    assert stats.compute_time >= 0.0


def test_unknown_signal(default_scope):
    with pytest.raises(KeyError):
        default_scope.get_signal("velocity")


@pytest.mark.parametrize(
    "config",
    [
        RunConfig(step_count=0),
        RunConfig(step_count=-3),
        RunConfig(start_time=5.0, end_time=5.0),
        RunConfig(start_time=5.0, end_time=0.0),
    ],
)
def test_invalid_config_rejected_before_integration(config, capsys):
    integrator = EulerIntegrator()
    with pytest.raises(ConfigurationError):
        integrator.iter_samples(config)
    with pytest.raises(ConfigurationError):
        integrator.run(config, verbose=True)
    assert capsys.readouterr().out == ""


def test_verbose_and_progress_output(capsys):
    EulerIntegrator().run(RunConfig(step_count=100), verbose=True, progress_bar=True)
    out = capsys.readouterr().out
    assert "dy/dt = cos(t) - y" in out
    assert "Progress: 100.0%" in out
    assert "Integration complete" in out


def test_numpy_step_count_gives_python_floats():
    scope = EulerIntegrator().run(RunConfig(step_count=np.int64(10)))
    assert len(scope) == 11
    assert all(type(v) is float for s in scope for v in s.as_row())


def test_check_finite_passes_for_stable_run(default_scope):
    assert default_scope.is_finite()
    assert default_scope.check_finite() is default_scope


def test_unstable_step_size_is_reported():
    # h = 100 is far outside the stability region h <= 2
    scope = EulerIntegrator().run(RunConfig(end_time=100000.0, step_count=1000))
    assert not scope.is_finite()
    with pytest.raises(DivergenceError, match="step_count"):
        scope.check_finite()
