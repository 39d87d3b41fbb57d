"""Property test: every operation is terminated exactly once.

Whatever mix of explicit outcomes and scope exits is generated, each
operation produces exactly one outcome line after its start line.
"""

from hypothesis import given, strategies as st

from outcome_log.outcome import operation
from tests.helpers import RecordingBackend

endings = st.sampled_from(["success", "failure", "failure_exc", "none", "raise"])


class _Boom(Exception):
    pass


def _run(backend: RecordingBackend, ending: str) -> None:
    try:
        with operation("op").with_("n", 1).started(backend) as op:
            if ending == "success":
                op.was_successful().log()
            elif ending == "failure":
                op.was_failure().log()
            elif ending == "failure_exc":
                op.was_failure().throwing_exception(ValueError("x")).log()
            elif ending == "raise":
                raise _Boom()
    except _Boom:
        pass


@given(sequence=st.lists(endings, min_size=1, max_size=12))
def test_one_outcome_per_operation(sequence):
    backend = RecordingBackend()
    for ending in sequence:
        _run(backend, ending)

    assert len(backend.calls) == 2 * len(sequence)
    starts = backend.calls[0::2]
    outcomes = backend.calls[1::2]
    assert all(call[0] == "info" for call in starts)
    for ending, call in zip(sequence, outcomes):
        if ending == "success":
            assert call[0] == "info"
        elif ending == "failure":
            assert call[0] == "error"
        else:
            assert call[0] == "error_exc"
            assert "outcome=failure" in call[1]
