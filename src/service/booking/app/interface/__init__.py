"""Booking Service Interfaces"""

from src.service.booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.booking.app.interface.i_booking_query_repo import IBookingQueryRepo

__all__ = ['IBookingCommandRepo', 'IBookingQueryRepo']
