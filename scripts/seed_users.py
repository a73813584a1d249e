"""Seed a small demo factory: one supervisor login, a worker and a product."""
from garment_erp.core.exceptions import ConflictError
from garment_erp.data.sql_store import SqlAlchemyStore
from garment_erp.data.store import eq
from garment_erp.database import SessionLocal, init_db
from garment_erp.schemas.people import SupervisorCreate, WorkerCreate
from garment_erp.schemas.product import OperationIn, ProductCreate
from garment_erp.services import product_service, supervisor_service, worker_service

init_db()
db = SessionLocal()
store = SqlAlchemyStore(db)


def create_supervisor(name, email, password):
    # Check if the login already exists to avoid unique constraint errors
    if store.select("users", columns=["id"], filters=[eq("email", email)]):
        print(f"User {email} already exists. Skipping.")
        return
    try:
        row = supervisor_service.add_supervisor(
            store, SupervisorCreate(name=name, email=email, password=password, salary_amount=25000)
        )
    except ConflictError as e:
        print(f"Skipping {email}: {e.message}")
        return
    print(f"Created supervisor -> {email} (employee {row['id']})")


def create_worker(name):
    if store.select("workers", columns=["id"], filters=[eq("name", name)]):
        print(f"Worker {name} already exists. Skipping.")
        return
    worker_service.create_worker(store, WorkerCreate(name=name))
    print(f"Created worker -> {name}")


def create_product(name, operations):
    if store.select("products", columns=["id"], filters=[eq("name", name)]):
        print(f"Product {name} already exists. Skipping.")
        return
    product = product_service.create_product(store, ProductCreate(
        name=name,
        material_cost=40,
        thread_cost=5,
        operations=[OperationIn(name=op, amount_per_piece=rate) for op, rate in operations],
    ))
    print(f"Created product -> {name} ({len(product['operations'])} operations)")


try:
    create_supervisor("Floor Supervisor", "supervisor@example.com", "Supervisor123!")
    create_worker("Demo Worker")
    create_product("Polo Shirt", [("Cutting", 1.5), ("Collar", 2.5), ("Hemming", 1.0)])
finally:
    db.close()
