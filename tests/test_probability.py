# tests/test_probability.py
import math

import pytest

from typo_lookup.core.probability import (
    ExponentialTypoModel,
    PoissonTailModel,
    poisson_pdf,
    probability_model_from_config,
)


def test_poisson_pdf_values():
    assert poisson_pdf(2.0, 0) == pytest.approx(math.exp(-2.0))
    assert poisson_pdf(2.0, 3) == pytest.approx(8 / 6 * math.exp(-2.0))
    assert poisson_pdf(1.0, -1) == 0.0
    assert sum(poisson_pdf(1.5, k) for k in range(60)) == pytest.approx(1.0)


@pytest.mark.parametrize("model", [ExponentialTypoModel(), PoissonTailModel()])
def test_models_are_non_increasing_and_bounded(model):
    last = 1.0
    for i in range(0, 41):
        d = i * 0.25
        p = model.probability(d, 1.0, 8.0)
        assert 0.0 <= p <= 1.0
        assert p <= last + 1e-12
        last = p
    assert model.probability(0.0, 1.0, 2.0) == 1.0
    assert model.probability(2.5, 1.0, 2.0) == 0.0


def test_poisson_tail_one_typo():
    # P[K >= 1] = 1 - e^-lambda
    assert PoissonTailModel().probability(0.5, 1.0, 3.0) == pytest.approx(1 - math.exp(-1.0))


def test_factory():
    assert isinstance(probability_model_from_config({}), ExponentialTypoModel)
    assert isinstance(probability_model_from_config({"probability_model": "poisson"}), PoissonTailModel)
    with pytest.raises(ValueError):
        probability_model_from_config({"probability_model": "gaussian"})
