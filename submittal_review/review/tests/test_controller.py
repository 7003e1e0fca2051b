"""Tests for the active-document state machine."""

import asyncio

import pytest
import pytest_asyncio

from submittal_review.ai.base import ChatReply, ReviewProvider, SessionHandle
from submittal_review.ai.providers.mock import MockReviewProvider
from submittal_review.review.constants import (
    ANALYSIS_ERROR_MESSAGE,
    DocumentStatus,
    ReviewState,
)
from submittal_review.review.encoder import decode_document
from submittal_review.review.exceptions import (
    DocumentNotReadyError,
    SchemaParseError,
    TransportError,
)


class GatedProvider(ReviewProvider):
    """Provider whose analyses finish only when the test releases them.

    Each analysis returns a record whose submittal number is the decoded
    document content, so tests can tell which submission produced a result.
    """

    def __init__(self, base_record):
        self.base_record = base_record
        self.gates: dict[str, asyncio.Event] = {}
        self.started: list[str] = []
        self.active = 0
        self.max_active = 0

    def gate(self, content: str) -> asyncio.Event:
        return self.gates.setdefault(content, asyncio.Event())

    async def analyze(self, encoded_document, mime_type, focus_instruction=None):
        content = decode_document(encoded_document).decode()
        self.started.append(content)
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await self.gate(content).wait()
        finally:
            self.active -= 1
        if content.startswith("fail"):
            raise TransportError(f"provider unavailable for {content}")
        return self.base_record.model_copy(update={"submittal_number": content})

    async def open_session(self, encoded_document, mime_type):
        return SessionHandle(session_id="gated", chat=[])

    async def send(self, session, text):
        return ChatReply(text=text)


async def wait_until(predicate, timeout: float = 1.0) -> None:
    async def _poll():
        while not predicate():
            await asyncio.sleep(0)

    await asyncio.wait_for(_poll(), timeout)


@pytest.fixture
def gated_provider(submittal_record):
    return GatedProvider(submittal_record)


@pytest.fixture
def controller(gated_provider):
    from submittal_review.review.controller import ReviewController

    return ReviewController(gated_provider)


class TestSubmit:
    @pytest.mark.asyncio
    async def test_starts_empty(self, controller):
        snapshot = controller.snapshot()

        assert snapshot.state == ReviewState.EMPTY
        assert snapshot.document is None
        assert snapshot.status_style is None

    @pytest.mark.asyncio
    async def test_success_transitions_to_ready(self, pdf_bytes, submittal_record):
        from submittal_review.review.controller import ReviewController

        provider = MockReviewProvider(record=submittal_record)
        controller = ReviewController(provider)

        snapshot = await controller.submit(
            pdf_bytes,
            file_name="rtu.pdf",
            mime_type="application/pdf",
            focus_instruction="Confirm 208V compatibility",
        )

        assert snapshot.state == ReviewState.READY
        assert snapshot.document.status == DocumentStatus.COMPLETED
        assert snapshot.document.record == submittal_record
        assert snapshot.document.file_name == "rtu.pdf"
        assert snapshot.status_style["text"] == "text-red-700"
        assert controller.document.encoded_data is not None
        assert provider.analyze_calls[0][1:] == (
            "application/pdf",
            "Confirm 208V compatibility",
        )

    @pytest.mark.asyncio
    async def test_state_is_analyzing_while_pending(self, controller, gated_provider):
        task = asyncio.create_task(
            controller.submit(b"SUB-1", file_name="a.pdf", mime_type="application/pdf")
        )
        await wait_until(lambda: gated_provider.started == ["SUB-1"])

        assert controller.state == ReviewState.ANALYZING
        assert controller.document.status == DocumentStatus.PROCESSING

        gated_provider.gate("SUB-1").set()
        snapshot = await task
        assert snapshot.state == ReviewState.READY

    @pytest.mark.asyncio
    async def test_failure_transitions_to_error_and_clears_slot(
        self, controller, gated_provider
    ):
        gated_provider.gate("fail-1").set()

        snapshot = await controller.submit(
            b"fail-1", file_name="bad.pdf", mime_type="application/pdf"
        )

        assert snapshot.state == ReviewState.ERROR
        assert snapshot.document is None
        assert "provider unavailable" in snapshot.error

    @pytest.mark.asyncio
    async def test_schema_failure_never_surfaces_partial_record(self, pdf_bytes):
        from submittal_review.review.controller import ReviewController

        class BrokenProvider(MockReviewProvider):
            async def analyze(self, *args, **kwargs):
                raise SchemaParseError("Failed to parse structured response")

        controller = ReviewController(BrokenProvider())

        snapshot = await controller.submit(pdf_bytes, file_name="x.pdf")

        assert snapshot.state == ReviewState.ERROR
        assert controller.document is None

    @pytest.mark.asyncio
    async def test_encoding_failure_transitions_to_error(self, controller):
        snapshot = await controller.submit(b"", file_name="empty.pdf")

        assert snapshot.state == ReviewState.ERROR
        assert snapshot.error == "Document is empty"

    @pytest.mark.asyncio
    async def test_error_then_new_submission_recovers(self, controller, gated_provider):
        gated_provider.gate("fail-1").set()
        gated_provider.gate("SUB-2").set()

        await controller.submit(b"fail-1", file_name="bad.pdf")
        snapshot = await controller.submit(b"SUB-2", file_name="good.pdf")

        assert snapshot.state == ReviewState.READY
        assert snapshot.error is None
        assert snapshot.document.record.submittal_number == "SUB-2"


class TestStaleResponses:
    @pytest.mark.asyncio
    async def test_slow_first_result_is_dropped_after_second_submission(
        self, controller, gated_provider
    ):
        first = asyncio.create_task(controller.submit(b"SUB-1", file_name="one.pdf"))
        await wait_until(lambda: gated_provider.started == ["SUB-1"])

        second = asyncio.create_task(controller.submit(b"SUB-2", file_name="two.pdf"))
        await asyncio.sleep(0)
        assert controller.document.file_name == "two.pdf"

        gated_provider.gate("SUB-1").set()
        await first
        assert controller.state == ReviewState.ANALYZING
        assert controller.document.record is None

        gated_provider.gate("SUB-2").set()
        snapshot = await second

        assert snapshot.state == ReviewState.READY
        assert snapshot.document.record.submittal_number == "SUB-2"
        assert gated_provider.max_active == 1

    @pytest.mark.asyncio
    async def test_stale_failure_does_not_clobber_newer_document(
        self, controller, gated_provider
    ):
        first = asyncio.create_task(controller.submit(b"fail-1", file_name="one.pdf"))
        await wait_until(lambda: gated_provider.started == ["fail-1"])
        second = asyncio.create_task(controller.submit(b"SUB-2", file_name="two.pdf"))

        gated_provider.gate("fail-1").set()
        gated_provider.gate("SUB-2").set()
        await first
        snapshot = await second

        assert snapshot.state == ReviewState.READY
        assert snapshot.error is None

    @pytest.mark.asyncio
    async def test_superseded_queued_submission_never_calls_provider(
        self, controller, gated_provider
    ):
        first = asyncio.create_task(controller.submit(b"SUB-1", file_name="one.pdf"))
        await wait_until(lambda: gated_provider.started == ["SUB-1"])
        second = asyncio.create_task(controller.submit(b"SUB-2", file_name="two.pdf"))
        third = asyncio.create_task(controller.submit(b"SUB-3", file_name="three.pdf"))

        gated_provider.gate("SUB-1").set()
        gated_provider.gate("SUB-3").set()
        await asyncio.gather(first, second, third)

        assert "SUB-2" not in gated_provider.started
        assert controller.document.record.submittal_number == "SUB-3"

    @pytest.mark.asyncio
    async def test_reset_while_analyzing_discards_result(
        self, controller, gated_provider
    ):
        task = asyncio.create_task(controller.submit(b"SUB-1", file_name="one.pdf"))
        await wait_until(lambda: gated_provider.started == ["SUB-1"])

        controller.reset()
        gated_provider.gate("SUB-1").set()
        await task

        assert controller.state == ReviewState.EMPTY
        assert controller.document is None


class TestReadyDocument:
    @pytest_asyncio.fixture
    async def ready_controller(self, pdf_bytes, submittal_record):
        from submittal_review.review.controller import ReviewController

        controller = ReviewController(MockReviewProvider(record=submittal_record))
        await controller.submit(pdf_bytes, file_name="rtu.pdf", mime_type="application/pdf")
        return controller

    @pytest.mark.asyncio
    async def test_chat_requires_ready_document(self, controller):
        with pytest.raises(DocumentNotReadyError):
            controller.chat()

    @pytest.mark.asyncio
    async def test_chat_is_created_once_per_document(self, ready_controller):
        assert ready_controller.chat() is ready_controller.chat()

    @pytest.mark.asyncio
    async def test_reset_destroys_chat_and_document(self, ready_controller):
        chat = ready_controller.chat()
        await chat.ask("What voltage is listed?")

        snapshot = ready_controller.reset()

        assert snapshot.state == ReviewState.EMPTY
        with pytest.raises(DocumentNotReadyError):
            ready_controller.chat()

    @pytest.mark.asyncio
    async def test_new_submission_gets_fresh_chat(self, ready_controller, pdf_bytes):
        old_chat = ready_controller.chat()

        await ready_controller.submit(pdf_bytes, file_name="rev1.pdf")

        assert ready_controller.chat() is not old_chat

    @pytest.mark.asyncio
    async def test_response_edit_lives_in_session_only(
        self, ready_controller, submittal_record
    ):
        document = ready_controller.update_response("Approved pending 480V unit.")

        assert document.current_response == "Approved pending 480V unit."
        assert document.record.draft_response == submittal_record.draft_response

        restored = ready_controller.discard_response_edit()
        assert restored.current_response == submittal_record.draft_response

    @pytest.mark.asyncio
    async def test_response_edit_requires_ready_document(self, controller):
        with pytest.raises(DocumentNotReadyError):
            controller.update_response("text")

    @pytest.mark.asyncio
    async def test_snapshot_does_not_expose_encoded_data(self, ready_controller):
        dumped = ready_controller.snapshot().model_dump()

        assert "encoded_data" not in dumped["document"]


class TestUnexpectedFailures:
    @pytest.mark.asyncio
    async def test_unexpected_provider_exception_moves_to_error(self, pdf_bytes):
        from submittal_review.review.controller import ReviewController

        class CrashingProvider(MockReviewProvider):
            async def analyze(self, *args, **kwargs):
                raise RuntimeError("unexpected SDK payload")

        controller = ReviewController(CrashingProvider())

        snapshot = await controller.submit(pdf_bytes, file_name="rtu.pdf")

        assert snapshot.state == ReviewState.ERROR
        assert snapshot.error == ANALYSIS_ERROR_MESSAGE
        assert controller.document is None

    @pytest.mark.asyncio
    async def test_cancelled_analysis_clears_slot(self, pdf_bytes, submittal_record):
        from submittal_review.review.controller import ReviewController

        provider = MockReviewProvider(record=submittal_record, latency=1.0)
        controller = ReviewController(provider)

        task = asyncio.create_task(controller.submit(pdf_bytes, file_name="rtu.pdf"))
        await wait_until(lambda: provider.analyze_calls)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert controller.state == ReviewState.EMPTY
        assert controller.document is None

        provider.latency = 0.0
        snapshot = await controller.submit(pdf_bytes, file_name="rtu-rev1.pdf")
        assert snapshot.state == ReviewState.READY

    @pytest.mark.asyncio
    async def test_cancelled_queued_submission_clears_slot(
        self, controller, gated_provider
    ):
        first = asyncio.create_task(controller.submit(b"SUB-1", file_name="one.pdf"))
        await wait_until(lambda: gated_provider.started == ["SUB-1"])
        second = asyncio.create_task(controller.submit(b"SUB-2", file_name="two.pdf"))
        await asyncio.sleep(0)

        second.cancel()
        with pytest.raises(asyncio.CancelledError):
            await second
        gated_provider.gate("SUB-1").set()
        await first

        assert controller.state == ReviewState.EMPTY
        assert controller.document is None
        assert gated_provider.started == ["SUB-1"]
