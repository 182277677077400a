from .mailer import LogNotifier, SmtpNotifier, get_notifier

__all__ = ["LogNotifier", "SmtpNotifier", "get_notifier"]
