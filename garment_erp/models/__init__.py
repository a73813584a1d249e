# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import (
    user, employee, worker, product, production, attendance, salary
)

# Explicit class exports for cleaner imports
from .user import User
from .employee import Employee
from .worker import Worker
from .product import Product, Operation
from .production import Production, ProductionOperation
from .attendance import Attendance
from .salary import EmployeeSalary, WorkerSalary

__all__ = [
    "User",
    "Employee",
    "Worker",
    "Product",
    "Operation",
    "Production",
    "ProductionOperation",
    "Attendance",
    "EmployeeSalary",
    "WorkerSalary",
]
