"""Unit tests for ChatSessionController."""

import asyncio

import pytest
import pytest_check as check

from src.chat.controller import EMPTY_RESPONSE_TEXT, FALLBACK_TEXT, ChatSessionController
from src.chat.gateway_client import (
    DecodeError,
    GatewayFailure,
    GatewayStatusError,
    GatewaySuccess,
    TransportError,
)
from src.chat.models import DEFAULT_GREETING, Sender, SessionState
from tests.fakes import FakeGateway


class TestSessionStart:
    """Tests for a freshly opened session."""

    def test_seeded_with_greeting(self, fake_gateway: FakeGateway) -> None:
        """New session holds exactly the bot greeting with id 1."""
        controller = ChatSessionController(fake_gateway)

        check.equal(len(controller.messages), 1)
        greeting = controller.messages[0]
        check.equal(greeting.id, 1)
        check.equal(greeting.sender, Sender.BOT)
        check.equal(greeting.text, DEFAULT_GREETING)
        check.is_false(controller.pending)
        check.equal(controller.draft_text, "")

    def test_custom_greeting(self, fake_gateway: FakeGateway) -> None:
        """Greeting text can be configured."""
        controller = ChatSessionController(fake_gateway, greeting="Welcome!")

        assert controller.messages[0].text == "Welcome!"

    def test_new_controller_starts_fresh(self, fake_gateway: FakeGateway) -> None:
        """Reopening the panel means a new session with only the greeting."""
        first = ChatSessionController(fake_gateway)
        first.state.append(Sender.USER, "left over")
        first.close()

        second = ChatSessionController(fake_gateway)

        assert len(second.messages) == 1


class TestSubmit:
    """Tests for accepting and resolving a submission."""

    async def test_success_appends_user_then_bot(self) -> None:
        """Gateway answer is appended verbatim after the user message."""
        gateway = FakeGateway([GatewaySuccess("Hi there")])
        controller = ChatSessionController(gateway)

        task = controller.submit("hello")
        assert task is not None
        await task

        check.equal([m.sender for m in controller.messages], [Sender.BOT, Sender.USER, Sender.BOT])
        check.equal(controller.messages[1].text, "hello")
        check.equal(controller.messages[2].text, "Hi there")
        check.is_false(controller.pending)
        check.equal(gateway.calls, ["hello"])

    async def test_pending_between_accept_and_resolution(self) -> None:
        """Pending is raised on accept and dropped on resolution."""
        gateway = FakeGateway(gate=asyncio.Event())
        controller = ChatSessionController(gateway)

        task = controller.submit("hello")

        check.is_true(controller.pending)
        check.equal(len(controller.messages), 2)

        gateway.gate.set()
        await task

        check.is_false(controller.pending)
        check.equal(len(controller.messages), 3)

    async def test_draft_cleared_on_accept(self, fake_gateway: FakeGateway) -> None:
        """Draft is cleared immediately, before the gateway answers."""
        controller = ChatSessionController(fake_gateway)
        controller.update_draft("hello")

        task = controller.submit(controller.draft_text)

        check.equal(controller.draft_text, "")
        await task

    async def test_text_is_trimmed(self, fake_gateway: FakeGateway) -> None:
        """User message and gateway payload are the trimmed text."""
        controller = ChatSessionController(fake_gateway)

        await controller.submit("  hello world \n")

        check.equal(controller.messages[1].text, "hello world")
        check.equal(fake_gateway.calls, ["hello world"])

    async def test_empty_response_maps_to_placeholder(self) -> None:
        """Empty gateway answer becomes the placeholder text."""
        controller = ChatSessionController(FakeGateway([GatewaySuccess("")]))

        await controller.submit("hello")

        assert controller.messages[-1].text == EMPTY_RESPONSE_TEXT

    async def test_message_ids_increase(self, fake_gateway: FakeGateway) -> None:
        """Ids are unique and follow append order."""
        controller = ChatSessionController(fake_gateway)

        await controller.submit("one")
        await controller.submit("two")

        assert [m.id for m in controller.messages] == [1, 2, 3, 4, 5]

    async def test_message_count_after_n_submissions(self, fake_gateway: FakeGateway) -> None:
        """N resolved submissions leave 1 + 2N messages."""
        controller = ChatSessionController(fake_gateway)

        for n in range(1, 6):
            await controller.submit(f"message {n}")
            check.equal(len(controller.messages), 1 + 2 * n)

        senders = [m.sender for m in controller.messages[1:]]
        check.equal(senders, [Sender.USER, Sender.BOT] * 5)


class TestSubmitRejection:
    """Tests for submissions that must be ignored."""

    async def test_empty_text_is_noop(self, fake_gateway: FakeGateway) -> None:
        """Empty and whitespace-only text change nothing."""
        controller = ChatSessionController(fake_gateway)

        for text in ("", "   ", "\n\t"):
            check.is_none(controller.submit(text))

        check.equal(len(controller.messages), 1)
        check.is_false(controller.pending)
        check.equal(fake_gateway.calls, [])

    async def test_submit_while_pending_is_noop(self) -> None:
        """Second submit before resolution is ignored and not sent."""
        gateway = FakeGateway(gate=asyncio.Event())
        controller = ChatSessionController(gateway)

        first = controller.submit("first")
        second = controller.submit("second")
        await asyncio.sleep(0)

        check.is_none(second)
        check.equal(len(controller.messages), 2)
        check.equal(gateway.calls, ["first"])

        gateway.gate.set()
        await first

        check.equal(len(controller.messages), 3)
        check.equal(controller.messages[-1].text, "echo: first")

    async def test_submit_after_close_is_noop(self, fake_gateway: FakeGateway) -> None:
        """A closed session accepts nothing."""
        controller = ChatSessionController(fake_gateway)
        controller.close()

        assert controller.submit("hello") is None
        assert len(controller.messages) == 1

    def test_can_submit_reflects_draft(self, fake_gateway: FakeGateway) -> None:
        """can_submit follows the draft when no text is given."""
        controller = ChatSessionController(fake_gateway)

        controller.update_draft("   ")
        check.is_false(controller.can_submit())

        controller.update_draft("hi")
        check.is_true(controller.can_submit())


class TestGatewayFailure:
    """Tests for fallback behaviour."""

    async def test_failure_appends_fallback(self) -> None:
        """Failing gateway yields the user message plus the fixed fallback."""
        error = TransportError("Connection failed: refused on 10.0.0.7")
        controller = ChatSessionController(FakeGateway([GatewayFailure(error)]))

        await controller.submit("hello")

        check.equal(len(controller.messages), 3)
        check.equal(controller.messages[1].text, "hello")
        check.equal(controller.messages[2].sender, Sender.BOT)
        check.equal(controller.messages[2].text, FALLBACK_TEXT)
        check.is_not_in("10.0.0.7", controller.messages[2].text)
        check.is_false(controller.pending)

    async def test_every_failure_kind_uses_same_fallback(self) -> None:
        """Status and decode failures are treated like transport ones."""
        gateway = FakeGateway(
            [
                GatewayFailure(GatewayStatusError(500, "Internal Server Error")),
                GatewayFailure(DecodeError("missing response")),
            ]
        )
        controller = ChatSessionController(gateway)

        await controller.submit("one")
        await controller.submit("two")

        bot_texts = [m.text for m in controller.messages[1:] if m.sender is Sender.BOT]
        assert bot_texts == [FALLBACK_TEXT, FALLBACK_TEXT]

    async def test_unexpected_exception_still_resolves(self) -> None:
        """A gateway that raises still produces exactly one fallback."""
        controller = ChatSessionController(FakeGateway([RuntimeError("boom")]))

        await controller.submit("hello")

        check.equal(controller.messages[-1].text, FALLBACK_TEXT)
        check.is_false(controller.pending)

    async def test_session_usable_after_failure(self) -> None:
        """A failed submission does not block the next one."""
        gateway = FakeGateway([GatewayFailure(TransportError("down")), GatewaySuccess("back")])
        controller = ChatSessionController(gateway)

        await controller.submit("first")
        await controller.submit("second")

        check.equal(controller.messages[-1].text, "back")
        check.equal(len(controller.messages), 5)


class TestSubscriptions:
    """Tests for the observer mechanism."""

    async def test_listeners_see_each_transition(self, fake_gateway: FakeGateway) -> None:
        """Listeners observe accept (pending) and resolution (idle)."""
        controller = ChatSessionController(fake_gateway)
        seen: list[tuple[int, bool]] = []
        controller.subscribe(lambda s: seen.append((len(s.messages), s.pending)))

        await controller.submit("hello")

        assert seen == [(2, True), (3, False)]

    def test_draft_update_notifies(self, fake_gateway: FakeGateway) -> None:
        """Draft changes are published, whitespace included."""
        controller = ChatSessionController(fake_gateway)
        drafts: list[str] = []
        controller.subscribe(lambda s: drafts.append(s.draft_text))

        controller.update_draft("  ")
        controller.update_draft("")

        assert drafts == ["  ", ""]

    def test_unsubscribe_stops_notifications(self, fake_gateway: FakeGateway) -> None:
        """Unsubscribed listeners are not called again."""
        controller = ChatSessionController(fake_gateway)
        calls: list[SessionState] = []
        unsubscribe = controller.subscribe(calls.append)

        controller.update_draft("a")
        unsubscribe()
        controller.update_draft("b")

        assert len(calls) == 1


class TestClose:
    """Tests for tearing down a session with a call in flight."""

    async def test_late_result_is_dropped(self) -> None:
        """Result arriving after close does not mutate the session."""
        gateway = FakeGateway(gate=asyncio.Event())
        controller = ChatSessionController(gateway)
        notified: list[SessionState] = []
        controller.subscribe(notified.append)

        task = controller.submit("hello")
        controller.close()
        gateway.gate.set()
        await task

        check.is_true(controller.closed)
        check.equal(len(controller.messages), 2)
        check.equal(len(notified), 1)


class TestStateIntegrity:
    """Tests that guard the one-reply-per-message pairing."""

    def test_submit_without_event_loop_leaves_state_untouched(
        self, fake_gateway: FakeGateway
    ) -> None:
        """Failing to schedule the call does not orphan a user message."""
        controller = ChatSessionController(fake_gateway)
        controller.update_draft("hello")

        with pytest.raises(RuntimeError):
            controller.submit("hello")

        check.equal(len(controller.messages), 1)
        check.is_false(controller.pending)
        check.equal(controller.draft_text, "hello")
        check.equal(fake_gateway.calls, [])

    def test_results_while_idle_are_ignored(self, fake_gateway: FakeGateway) -> None:
        """Success or failure with nothing pending adds no bot message."""
        controller = ChatSessionController(fake_gateway)
        notified: list[SessionState] = []
        controller.subscribe(notified.append)

        controller.on_gateway_success("stray")
        controller.on_gateway_failure(TransportError("late"))
        controller.resolve(GatewaySuccess("stray"))

        check.equal(len(controller.messages), 1)
        check.equal(notified, [])

    async def test_second_result_for_one_submission_is_ignored(
        self, fake_gateway: FakeGateway
    ) -> None:
        """Only the first resolution of a submission is applied."""
        controller = ChatSessionController(fake_gateway)

        await controller.submit("hello")
        controller.on_gateway_failure(TransportError("duplicate"))

        check.equal(len(controller.messages), 3)
        check.equal(controller.messages[-1].text, "echo: hello")
