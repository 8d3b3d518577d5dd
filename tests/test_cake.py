import random

import pytest

from progkit.cake import Shop

DEFAULTS = dict(
    cakes=20,
    bake_time=0.010,
    num_icers=1,
    ice_time=0.010,
    inscribe_time=0.010,
)


@pytest.mark.parametrize(
    "overrides",
    [
        {},
        {"bake_buf": 10, "ice_buf": 10},
        {"bake_stddev": 0.0025, "ice_stddev": 0.0025, "inscribe_stddev": 0.0025},
        {
            "bake_stddev": 0.0025,
            "ice_stddev": 0.0025,
            "inscribe_stddev": 0.0025,
            "bake_buf": 10,
            "ice_buf": 10,
        },
        {"ice_time": 0.050},
        {"ice_time": 0.050, "num_icers": 5},
    ],
)
def test_shop_configurations_finish_every_cake(overrides):
    shop = Shop(**{**DEFAULTS, **overrides}, rng=random.Random(1))
    assert shop.work(1) == shop.cakes


def test_multiple_runs_count_all_cakes():
    shop = Shop(cakes=3, num_icers=2, bake_buf=1, ice_buf=1)
    assert shop.work(2) == 2 * shop.cakes


def test_verbose_reports_each_stage_in_order(capsys):
    shop = Shop(verbose=True, cakes=5, num_icers=2)
    shop.work(1)
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 4 * shop.cakes
    for cake in range(shop.cakes):
        positions = [
            lines.index(f"{stage} {cake}")
            for stage in ("baking", "icing", "inscribing", "finished")
        ]
        assert positions == sorted(positions)


def test_quiet_shop_prints_nothing(capsys):
    Shop(cakes=3, num_icers=1).work(1)
    assert capsys.readouterr().out == ""


def test_no_icers_is_rejected():
    with pytest.raises(ValueError):
        Shop(cakes=1, num_icers=0).work(1)