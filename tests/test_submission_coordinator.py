"""Tests for the submission coordinator."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from clinic.core.enums import BookingMethod, SubmissionErrorKind
from clinic.core.exceptions import ClinicApiError, SubmissionError
from clinic.models import BookingDraft, HandoffContext
from clinic.services.booking import SubmissionCoordinator, build_booking_payload


@pytest.fixture
def draft() -> BookingDraft:
    return BookingDraft(
        specialty_id=1,
        doctor_id=1,
        booking_day="Wed:1714514400000",
        booking_time="10:00",
        user_name="محمد علي",
        user_phone="+20 109 100 3965",
        user_email="m@example.com",
        notes="أول زيارة",
    )


@pytest.fixture
def context() -> HandoffContext:
    return HandoffContext(
        doctor_name="د. أحمد",
        specialty_name="طب الأطفال",
        formatted_date="2024-05-01",
        booking_date="2024-05-01",
    )


def test_payload_maps_draft_onto_bookings_table(draft, context):
    payload = build_booking_payload(draft, BookingMethod.ONLINE, context)
    assert payload["booking_day"] == "Wed"
    assert payload["booking_date"] == "2024-05-01"
    assert payload["user_phone"] == "201091003965"
    assert payload["booking_method"] == "online"
    assert payload["notes"] == "أول زيارة"


class TestOnlineChannel:
    @pytest.mark.asyncio
    async def test_single_persistence_call(self, draft, context, booking_store, handoff):
        coordinator = SubmissionCoordinator(booking_store, handoff)
        outcome = await coordinator.submit(draft, BookingMethod.ONLINE, context)

        booking_store.create_booking.assert_awaited_once()
        handoff.open.assert_not_called()
        assert outcome.reference == "a1b2c3d4"
        assert outcome.record_id == "a1b2c3d4-e5f6-7890-abcd-ef0123456789"
        assert outcome.persistence_degraded is False
        assert outcome.handoff_url is None

    @pytest.mark.asyncio
    async def test_persistence_failure(self, draft, context, booking_store, handoff):
        booking_store.create_booking.side_effect = ClinicApiError("down", status=503)
        coordinator = SubmissionCoordinator(booking_store, handoff)

        with pytest.raises(SubmissionError) as exc_info:
            await coordinator.submit(draft, BookingMethod.ONLINE, context)

        assert exc_info.value.kind == SubmissionErrorKind.PERSISTENCE_FAILED
        assert exc_info.value.channel == "online"
        assert exc_info.value.recoverable is True
        booking_store.create_booking.assert_awaited_once()
        handoff.open.assert_not_called()


class TestWhatsAppChannel:
    """Hand-off first; persistence failure only degrades the outcome."""

    @pytest.mark.asyncio
    async def test_persistence_failure_is_soft_success(self, context, booking_store, handoff):
        order = []
        handoff.open.side_effect = lambda **kwargs: order.append("handoff") or "https://wa.me/x"

        async def failing_create(payload):
            order.append("persist")
            raise ClinicApiError("down", status=503)

        booking_store.create_booking = AsyncMock(side_effect=failing_create)
        draft = BookingDraft(
            specialty_id=1,
            doctor_id=1,
            booking_day="Wed:1714514400000",
            booking_time="10:00",
            user_name="محمد",
            user_phone="01091003965",
        )

        outcome = await SubmissionCoordinator(booking_store, handoff).submit(
            draft, BookingMethod.WHATSAPP, context
        )

        assert outcome.persistence_degraded is True
        assert outcome.reference == ""
        assert outcome.handoff_url == "https://wa.me/x"
        assert order == ["handoff", "persist"]
        handoff.open.assert_called_once()
        kwargs = handoff.open.call_args.kwargs
        assert kwargs["doctor_name"] == "د. أحمد"
        assert kwargs["date"] == "2024-05-01"
        assert kwargs["time"] == "10:00"

    @pytest.mark.asyncio
    async def test_unexpected_persistence_error_is_also_isolated(
        self, draft, context, booking_store, handoff
    ):
        booking_store.create_booking.side_effect = RuntimeError("session closed")
        outcome = await SubmissionCoordinator(booking_store, handoff).submit(
            draft, BookingMethod.WHATSAPP, context
        )
        assert outcome.persistence_degraded is True

    @pytest.mark.asyncio
    async def test_persistence_success_attaches_reference(
        self, draft, context, booking_store, handoff
    ):
        outcome = await SubmissionCoordinator(booking_store, handoff).submit(
            draft, BookingMethod.WHATSAPP, context
        )
        assert outcome.reference == "a1b2c3d4"
        assert outcome.persistence_degraded is False
        assert outcome.channel == BookingMethod.WHATSAPP
        payload = booking_store.create_booking.await_args.args[0]
        assert payload["booking_method"] == "whatsapp"

    @pytest.mark.asyncio
    async def test_handoff_failure_skips_persistence(self, draft, context, booking_store, handoff):
        handoff.open.side_effect = RuntimeError("no browser")

        with pytest.raises(SubmissionError) as exc_info:
            await SubmissionCoordinator(booking_store, handoff).submit(
                draft, BookingMethod.WHATSAPP, context
            )

        assert exc_info.value.kind == SubmissionErrorKind.HANDOFF_FAILED
        booking_store.create_booking.assert_not_awaited()


@pytest.mark.asyncio
async def test_phone_channel_unsupported(draft, context, booking_store, handoff):
    with pytest.raises(SubmissionError) as exc_info:
        await SubmissionCoordinator(booking_store, handoff).submit(draft, "phone", context)
    assert exc_info.value.kind == SubmissionErrorKind.UNSUPPORTED_CHANNEL
    booking_store.create_booking.assert_not_awaited()
    handoff.open.assert_not_called()


@pytest.mark.asyncio
async def test_record_without_id_is_persistence_failure(draft, context, handoff):
    store = MagicMock()
    store.create_booking = AsyncMock(return_value={})
    with pytest.raises(SubmissionError):
        await SubmissionCoordinator(store, handoff).submit(draft, BookingMethod.ONLINE, context)
