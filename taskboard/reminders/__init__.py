"""Deadline reminder scheduling and dispatch engine.

Run once per day: evaluate every enabled activity and task reminder, render
its message, resolve its WhatsApp group and deliver the queue one message at
a time. See ``taskboard.reminders.service.process_all_reminders``.
"""
