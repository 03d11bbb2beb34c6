import pytest

from checkping import Error, Idle, Reply, aggregate, loss_percent, summarize

from conftest import ScriptedProber


def test_all_replies():
    prober = ScriptedProber([Reply(rtt) for rtt in (10.0, 20.0, 30.0, 40.0, 50.0)])
    stats = aggregate(prober, "192.0.2.1", 5, 10)

    assert stats.sent == 5
    assert stats.received == 5
    assert stats.total_latency_ms == pytest.approx(150.0)
    assert stats.average_latency_ms == pytest.approx(30.0)
    assert stats.loss_percent == 0
    assert prober.calls == [("192.0.2.1", 10)] * 5


def test_partial_loss_is_truncated_to_full_loss():
    prober = ScriptedProber([Reply(10.0), Idle(), Reply(30.0), Idle(), Idle()])
    stats = aggregate(prober, "192.0.2.1", 5, 10)

    assert stats.sent == 5
    assert stats.received == 2
    assert stats.lost == 3
    assert stats.average_latency_ms == pytest.approx(20.0)
    assert stats.loss_percent == 100


def test_exact_loss_uses_true_ratio():
    prober = ScriptedProber([Reply(10.0), Idle(), Reply(30.0), Idle(), Idle()])
    stats = aggregate(prober, "192.0.2.1", 5, 10, exact_loss=True)

    assert stats.loss_percent == pytest.approx(60.0)


def test_errors_count_as_lost():
    prober = ScriptedProber([Error("Resolve error nowhere"), Error("Send error")])
    stats = aggregate(prober, "nowhere.invalid", 2, 1)

    assert stats.sent == 2
    assert stats.received == 0
    assert stats.average_latency_ms == 0.0
    assert stats.loss_percent == 100


def test_probes_run_sequentially_exactly_packet_count_times():
    prober = ScriptedProber()
    stats = aggregate(prober, "192.0.2.1", 3, 2)

    assert len(prober.calls) == 3
    assert stats.sent == 3
    assert stats.received == 0


@pytest.mark.parametrize(
    "sent, received, truncated, exact",
    [
        (5, 5, 0.0, 0.0),
        (5, 0, 100.0, 100.0),
        (5, 4, 100.0, 20.0),
        (4, 1, 100.0, 75.0),
        (0, 0, 0.0, 0.0),
    ],
)
def test_loss_percent(sent, received, truncated, exact):
    assert loss_percent(sent, received) == truncated
    assert loss_percent(sent, received, exact=True) == pytest.approx(exact)


def test_summarize_empty():
    stats = summarize([])
    assert (stats.sent, stats.received, stats.average_latency_ms, stats.loss_percent) == (
        0,
        0,
        0.0,
        0.0,
    )
