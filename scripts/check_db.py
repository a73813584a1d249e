from sqlalchemy import inspect

import garment_erp.models  # noqa: F401
from garment_erp.database import Base, engine


def check_db():
    inspector = inspect(engine)
    existing = set(inspector.get_table_names())

    print(f"Tables in {engine.url}:")
    for name, table in Base.metadata.tables.items():
        if name not in existing:
            print(f" - {name}  (MISSING)")
            continue
        print(f" - {name}")
        db_cols = {c["name"]: c for c in inspector.get_columns(name)}
        for col in table.columns:
            found = db_cols.get(col.name)
            if found is None:
                print(f"   * {col.name} (MISSING)")
            else:
                print(f"   * {col.name} ({found['type']})")


if __name__ == "__main__":
    check_db()
