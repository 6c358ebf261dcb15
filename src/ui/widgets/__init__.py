"""UI Widgets - Reusable UI components"""

from .toast_notification import ToastNotification

__all__ = ['ToastNotification']
