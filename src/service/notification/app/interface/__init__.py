"""Notification Service Interfaces"""

from src.service.notification.app.interface.i_email_sender import IEmailSender

__all__ = ['IEmailSender']
