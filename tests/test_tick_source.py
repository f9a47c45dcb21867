from EduFlow.services.tick_source import ManualTickSource, QtTickSource


def test_manual_source_fires_only_while_started():
    ticks = ManualTickSource()
    seen = []
    assert ticks.advance(3) == 0
    ticks.start(lambda: seen.append(1))
    assert ticks.active is True
    assert ticks.advance(3) == 3
    ticks.stop()
    assert ticks.advance(3) == 0
    assert len(seen) == 3
    assert ticks.ticks == 3


def test_manual_source_stops_mid_advance():
    ticks = ManualTickSource()
    seen = []

    def callback():
        seen.append(1)
        if len(seen) == 2:
            ticks.stop()

    ticks.start(callback)
    assert ticks.advance(10) == 2


def test_qt_source_interval_and_stop():
    ticks = QtTickSource(interval_ms=1000)
    assert ticks._timer.interval() == 1000
    assert ticks.active is False
    ticks.start(lambda: None)
    assert ticks.active is True
    ticks.stop()
    assert ticks.active is False
