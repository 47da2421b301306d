"""Tests for the reminder run service."""

import threading
import unittest
from datetime import UTC, date, datetime
from unittest.mock import MagicMock, patch
from uuid import uuid4

from taskboard.messaging.whatsapp import WatzapClientError, WatzapConfigurationError
from taskboard.notifications import NotificationResult
from taskboard.reminders.channels import ResolvedChannel
from taskboard.reminders.exceptions import ReminderRunInProgressError
from taskboard.reminders.models import DispatchItem, ReminderRunResult
from taskboard.reminders.service import dispatch_queue, process_all_reminders

TODAY = date(2026, 2, 21)


def _item(label: str) -> DispatchItem:
    return DispatchItem(
        channel_id=uuid4(),
        destination_id=f"group-{label}",
        message=f"message {label}",
        label=label,
    )


class TestDispatchQueue(unittest.TestCase):
    """Tests for dispatch_queue function."""

    def setUp(self) -> None:
        """Patch the last-sent bookkeeping session."""
        session_patcher = patch("taskboard.reminders.service.get_session")
        self.mock_get_session = session_patcher.start()
        self.addCleanup(session_patcher.stop)
        self.mock_session = MagicMock()
        self.mock_get_session.return_value.__enter__ = MagicMock(return_value=self.mock_session)
        self.mock_get_session.return_value.__exit__ = MagicMock(return_value=False)

        update_patcher = patch("taskboard.reminders.service.update_group_last_sent")
        self.mock_update_last_sent = update_patcher.start()
        self.addCleanup(update_patcher.stop)

    def test_sends_sequentially_with_delay_and_records_failure(self) -> None:
        """Test send/wait ordering when the second of three sends fails."""
        events: list[tuple[str, object]] = []
        messenger = MagicMock()

        def _send(group_id: str, message: str) -> dict:
            events.append(("send", group_id))
            if group_id == "group-2":
                raise WatzapClientError("Watzap API returned error: group not found")
            return {"status": True}

        messenger.send_group_message.side_effect = _send
        queue = [_item("1"), _item("2"), _item("3")]
        result = ReminderRunResult(run_date=TODAY)

        dispatch_queue(
            messenger,
            queue,
            result,
            delay_seconds=90,
            sleep=lambda seconds: events.append(("sleep", seconds)),
        )

        self.assertEqual(
            events,
            [
                ("send", "group-1"),
                ("sleep", 90),
                ("send", "group-2"),
                ("sleep", 90),
                ("send", "group-3"),
            ],
        )
        self.assertEqual(result.sent, 2)
        self.assertEqual(result.failed, 1)
        self.assertEqual(len(result.errors), 1)
        self.assertTrue(result.errors[0].startswith("Failed: 2: "))
        self.assertIn("group not found", result.errors[0])
        self.assertFalse(result.cancelled)

    def test_no_delay_after_single_item(self) -> None:
        """Test that a one-item queue never sleeps."""
        messenger = MagicMock()
        sleep = MagicMock()
        result = ReminderRunResult(run_date=TODAY)

        dispatch_queue(messenger, [_item("1")], result, delay_seconds=90, sleep=sleep)

        sleep.assert_not_called()
        self.assertEqual(result.sent, 1)

    def test_empty_queue(self) -> None:
        """Test that an empty queue does nothing."""
        messenger = MagicMock()
        sleep = MagicMock()
        result = ReminderRunResult(run_date=TODAY)

        dispatch_queue(messenger, [], result, delay_seconds=90, sleep=sleep)

        messenger.send_group_message.assert_not_called()
        sleep.assert_not_called()
        self.assertEqual(result.sent, 0)

    def test_records_last_sent_only_on_success(self) -> None:
        """Test that only delivered groups get last_message_sent_at updated."""
        ok_item = _item("ok")
        bad_item = _item("bad")
        messenger = MagicMock()
        messenger.send_group_message.side_effect = [{"status": True}, WatzapClientError("down")]
        result = ReminderRunResult(run_date=TODAY)

        dispatch_queue(messenger, [ok_item, bad_item], result, delay_seconds=0, sleep=MagicMock())

        self.mock_update_last_sent.assert_called_once_with(self.mock_session, ok_item.channel_id)

    def test_bookkeeping_failure_still_counts_as_sent(self) -> None:
        """Test that a failure to record last send does not mark the send failed."""
        self.mock_update_last_sent.side_effect = RuntimeError("db down")
        messenger = MagicMock()
        result = ReminderRunResult(run_date=TODAY)

        dispatch_queue(messenger, [_item("1")], result, delay_seconds=0, sleep=MagicMock())

        self.assertEqual(result.sent, 1)
        self.assertEqual(result.failed, 0)

    def test_cancellation_stops_before_next_item(self) -> None:
        """Test that setting the cancel event stops the remaining sends."""
        cancel_event = threading.Event()
        messenger = MagicMock()
        messenger.send_group_message.side_effect = lambda *_: cancel_event.set()
        result = ReminderRunResult(run_date=TODAY)

        dispatch_queue(
            messenger,
            [_item("1"), _item("2"), _item("3")],
            result,
            delay_seconds=90,
            cancel_event=cancel_event,
        )

        self.assertEqual(messenger.send_group_message.call_count, 1)
        self.assertEqual(result.sent, 1)
        self.assertTrue(result.cancelled)


class TestProcessAllReminders(unittest.TestCase):
    """Tests for process_all_reminders function."""

    def setUp(self) -> None:
        """Patch database access and collectors."""
        self.patchers = {
            name: patch(f"taskboard.reminders.service.{name}")
            for name in (
                "get_session",
                "acquire_run_lease",
                "release_run_lease",
                "collect_activity_reminders",
                "collect_task_reminders",
                "build_watzap_client",
                "update_group_last_sent",
            )
        }
        self.mocks = {name: patcher.start() for name, patcher in self.patchers.items()}
        for patcher in self.patchers.values():
            self.addCleanup(patcher.stop)

        self.mock_session = MagicMock()
        get_session = self.mocks["get_session"]
        get_session.return_value.__enter__ = MagicMock(return_value=self.mock_session)
        get_session.return_value.__exit__ = MagicMock(return_value=False)

        self.mocks["acquire_run_lease"].return_value = True
        self.activity_item = _item("activity")
        self.task_item = _item("task")
        self.mocks["collect_activity_reminders"].return_value = [self.activity_item]
        self.mocks["collect_task_reminders"].return_value = [self.task_item]

    def test_activity_items_sent_before_task_items(self) -> None:
        """Test full run order and counts."""
        messenger = MagicMock()
        sleep = MagicMock()

        result = process_all_reminders(
            messenger=messenger, today=TODAY, delay_seconds=90, sleep=sleep
        )

        self.assertEqual(result.run_date, TODAY)
        self.assertEqual(result.queued, 2)
        self.assertEqual(result.sent, 2)
        self.assertEqual(result.failed, 0)
        sent_groups = [c.args[0] for c in messenger.send_group_message.call_args_list]
        self.assertEqual(sent_groups, ["group-activity", "group-task"])
        sleep.assert_called_once_with(90)
        self.mocks["collect_activity_reminders"].assert_called_once()
        self.assertEqual(self.mocks["collect_activity_reminders"].call_args.args[1], TODAY)
        self.mocks["build_watzap_client"].assert_not_called()
        self.mocks["release_run_lease"].assert_called_once()

    def test_builds_client_when_not_given(self) -> None:
        """Test that the Watzap client is built from stored credentials."""
        client = MagicMock()
        self.mocks["build_watzap_client"].return_value = client

        process_all_reminders(today=TODAY, delay_seconds=0, sleep=MagicMock())

        self.mocks["build_watzap_client"].assert_called_once_with(self.mock_session)
        self.assertEqual(client.send_group_message.call_count, 2)

    def test_lease_held_raises(self) -> None:
        """Test that a concurrent run is rejected before collecting."""
        self.mocks["acquire_run_lease"].return_value = False
        messenger = MagicMock()

        with self.assertRaises(ReminderRunInProgressError):
            process_all_reminders(messenger=messenger, today=TODAY, delay_seconds=0)

        self.mocks["collect_activity_reminders"].assert_not_called()
        messenger.send_group_message.assert_not_called()
        self.mocks["release_run_lease"].assert_not_called()

    def test_configuration_error_aborts_run(self) -> None:
        """Test that missing credentials stop the run and release the lease."""
        self.mocks["build_watzap_client"].side_effect = WatzapConfigurationError(
            "WhatsApp credentials not configured"
        )

        with self.assertRaises(WatzapConfigurationError):
            process_all_reminders(today=TODAY, delay_seconds=0, sleep=MagicMock())

        self.mocks["collect_activity_reminders"].assert_not_called()
        self.mocks["release_run_lease"].assert_called_once()

    def test_lease_released_with_same_holder(self) -> None:
        """Test that the lease is released by the holder that acquired it."""
        process_all_reminders(
            messenger=MagicMock(), today=TODAY, delay_seconds=0, sleep=MagicMock()
        )

        acquired_holder = self.mocks["acquire_run_lease"].call_args.args[1]
        released_holder = self.mocks["release_run_lease"].call_args.args[1]
        self.assertEqual(acquired_holder, released_holder)

    def test_second_run_same_day_sends_again(self) -> None:
        """Test that sequential runs on one day both send every message.

        The lease only prevents overlapping runs; there is no per-day
        delivery record.
        """
        messenger = MagicMock()

        first = process_all_reminders(
            messenger=messenger, today=TODAY, delay_seconds=0, sleep=MagicMock()
        )
        second = process_all_reminders(
            messenger=messenger, today=TODAY, delay_seconds=0, sleep=MagicMock()
        )

        self.assertEqual(first.sent, 2)
        self.assertEqual(second.sent, 2)
        self.assertEqual(messenger.send_group_message.call_count, 4)

class TestProcessAllRemindersWithRealCollectors(unittest.TestCase):
    """Tests for process_all_reminders with only storage and delivery mocked."""

    def setUp(self) -> None:
        """Patch queries, writes and the run lease, leaving the collectors real."""
        self.mocks: dict[str, MagicMock] = {}
        for target in (
            "taskboard.reminders.service.get_session",
            "taskboard.reminders.service.acquire_run_lease",
            "taskboard.reminders.service.release_run_lease",
            "taskboard.reminders.service.update_group_last_sent",
            "taskboard.reminders.collectors.list_enabled_activity_reminders",
            "taskboard.reminders.collectors.list_enabled_task_reminders",
            "taskboard.reminders.collectors.get_message_template",
            "taskboard.reminders.collectors.resolve_channel",
            "taskboard.reminders.collectors.create_notification",
        ):
            patcher = patch(target)
            self.mocks[target.rsplit(".", 1)[1]] = patcher.start()
            self.addCleanup(patcher.stop)

        self.mock_session = MagicMock()
        get_session = self.mocks["get_session"]
        get_session.return_value.__enter__ = MagicMock(return_value=self.mock_session)
        get_session.return_value.__exit__ = MagicMock(return_value=False)
        self.mocks["acquire_run_lease"].return_value = True

        self.dina_id = uuid4()
        pic = MagicMock()
        pic.user.id = self.dina_id
        pic.user.name = "Dina Rahma"
        activity = MagicMock()
        activity.id = uuid4()
        activity.name = "Ramadan Campaign 2026"
        activity.status = "In Progress"
        activity.end_date = datetime(2026, 2, 22, 10, 0, tzinfo=UTC)
        activity.activity_type.name = "IG Campaign"
        activity.pics = [pic]
        activity.approvers = []

        reminder = MagicMock()
        reminder.id = uuid4()
        reminder.enabled = True
        reminder.trigger = "H-1"
        reminder.custom_days = None
        reminder.channel = "Marketing"
        reminder.template_id = None
        reminder.custom_message = None
        reminder.describe_trigger.return_value = "H-1"
        reminder.activity = activity

        self.channel = ResolvedChannel(channel_id=uuid4(), destination_id="120363000000@g.us")
        self.mocks["list_enabled_activity_reminders"].return_value = [reminder]
        self.mocks["list_enabled_task_reminders"].return_value = []
        self.mocks["resolve_channel"].return_value = self.channel
        self.mocks["create_notification"].return_value = NotificationResult.CREATED

    def _run(self, messenger: MagicMock) -> ReminderRunResult:
        return process_all_reminders(
            messenger=messenger, today=TODAY, delay_seconds=0, sleep=MagicMock()
        )

    def test_due_activity_reminder_sends_and_notifies(self) -> None:
        """Test one H-1 reminder flows from collection to delivery and bookkeeping."""
        messenger = MagicMock()

        result = self._run(messenger)

        self.assertEqual(result.queued, 1)
        self.assertEqual(result.sent, 1)
        self.assertEqual(result.failed, 0)
        messenger.send_group_message.assert_called_once()
        group_id, message = messenger.send_group_message.call_args.args
        self.assertEqual(group_id, self.channel.destination_id)
        self.assertIn("Dina Rahma", message)
        self.assertIn("2026-02-22", message)
        self.mocks["create_notification"].assert_called_once()
        self.assertEqual(
            self.mocks["create_notification"].call_args.kwargs["user_id"], self.dina_id
        )
        self.mocks["update_group_last_sent"].assert_called_once_with(
            self.mock_session, self.channel.channel_id
        )

    def test_second_run_repeats_sends_and_notifications(self) -> None:
        """Test that a second run on the same day delivers and notifies again."""
        messenger = MagicMock()

        self._run(messenger)
        self._run(messenger)

        self.assertEqual(messenger.send_group_message.call_count, 2)
        self.assertEqual(self.mocks["create_notification"].call_count, 2)
        self.assertEqual(self.mocks["update_group_last_sent"].call_count, 2)



if __name__ == "__main__":
    unittest.main()
