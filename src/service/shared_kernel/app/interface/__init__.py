"""Shared Kernel Interfaces"""

from src.service.shared_kernel.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.shared_kernel.app.interface.i_user_query_repo import IUserQueryRepo

__all__ = ['IUserCommandRepo', 'IUserQueryRepo']
