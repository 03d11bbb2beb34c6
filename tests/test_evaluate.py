import pytest

from checkping import ProbeStatistics, Status, ThresholdSpec, evaluate

WARNING = ThresholdSpec(800, 20.0)
CRITICAL = ThresholdSpec(1000, 40.0)


def _stats(avg_ms, loss, sent=5, received=5):
    return ProbeStatistics(
        sent=sent,
        received=received,
        total_latency_ms=avg_ms * received,
        average_latency_ms=avg_ms,
        loss_percent=loss,
    )


def test_ok():
    verdict = evaluate(_stats(500.0, 0.0), WARNING, CRITICAL, 5)
    assert verdict.status is Status.OK
    assert verdict.message == "Sent: 5, Recv: 5, RTT(Avg): 500.000ms, PacketLoss 0%"


def test_critical_rtt():
    verdict = evaluate(_stats(1200.0, 0.0), WARNING, CRITICAL, 5)
    assert verdict.status is Status.CRITICAL
    assert verdict.message.startswith("Too long RTT. ")


def test_critical_loss_wins_over_rtt():
    verdict = evaluate(_stats(1200.0, 100.0, received=0), WARNING, CRITICAL, 5)
    assert verdict.status is Status.CRITICAL
    assert verdict.message == (
        "Too many PacketLoss. Sent: 5, Recv: 0, RTT(Avg): 1200.000ms, PacketLoss 100%"
    )


def test_warning_loss():
    verdict = evaluate(_stats(100.0, 30.0), WARNING, CRITICAL, 5)
    assert verdict.status is Status.WARNING
    assert verdict.message.startswith("Too many PacketLoss. ")


def test_warning_rtt():
    verdict = evaluate(_stats(900.0, 0.0), WARNING, CRITICAL, 5)
    assert verdict.status is Status.WARNING
    assert verdict.message.startswith("Too long RTT. ")


@pytest.mark.parametrize("avg_ms, loss", [(1.0, 0.0), (5000.0, 100.0), (900.0, 30.0)])
def test_unexpected_sent_count_is_unknown(avg_ms, loss):
    verdict = evaluate(_stats(avg_ms, loss, sent=4, received=4), WARNING, CRITICAL, 5)
    assert verdict.status is Status.UNKNOWN
    assert not verdict.message.startswith("Too")


def test_thresholds_are_inclusive():
    assert evaluate(_stats(800.0, 0.0), WARNING, CRITICAL, 5).status is Status.WARNING
    assert evaluate(_stats(1000.0, 0.0), WARNING, CRITICAL, 5).status is Status.CRITICAL
    assert evaluate(_stats(0.0, 40.0), WARNING, CRITICAL, 5).status is Status.CRITICAL


def test_warning_above_critical_is_clamped():
    warning = ThresholdSpec(2000, 20.0)
    verdict = evaluate(_stats(1500.0, 0.0), warning, CRITICAL, 5)
    assert verdict.status is Status.CRITICAL


def test_nan_threshold_falls_through_to_unknown():
    warning = ThresholdSpec(800, float("nan"))
    critical = ThresholdSpec(1000, float("nan"))
    verdict = evaluate(_stats(100.0, 0.0), warning, critical, 5)
    assert verdict.status is Status.UNKNOWN
    assert verdict.message == "Unexpected reach to end of evaluation"


def test_verdict_renders_as_status_line():
    verdict = evaluate(_stats(500.0, 0.0), WARNING, CRITICAL, 5)
    assert str(verdict) == "Ping OK: Sent: 5, Recv: 5, RTT(Avg): 500.000ms, PacketLoss 0%"
    assert verdict.exit_code == 0
