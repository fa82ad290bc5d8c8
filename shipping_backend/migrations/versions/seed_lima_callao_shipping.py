"""seed lima and callao shipping zones

Revision ID: seed_lima_callao_shipping
Revises: create_shipping_tables
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = 'seed_lima_callao_shipping'
down_revision: Union[str, None] = 'create_shipping_tables'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# (department code, name), (province code, name, department code)
DEPARTMENTS = [("15", "Lima"), ("07", "Callao")]
PROVINCES = [("1501", "Lima", "15"), ("0701", "Callao", "07")]

LIMA_DISTRICTS = [
    ("150101", "Lima (Cercado)"),
    ("150104", "Barranco"),
    ("150108", "Chorrillos"),
    ("150109", "Cieneguilla"),
    ("150110", "Comas"),
    ("150114", "La Molina"),
    ("150115", "La Victoria"),
    ("150117", "Los Olivos"),
    ("150122", "Miraflores"),
    ("150127", "Punta Negra"),
    ("150130", "San Borja"),
    ("150131", "San Isidro"),
    ("150136", "San Miguel"),
    ("150140", "Santiago de Surco"),
    ("150141", "Surquillo"),
]

CALLAO_DISTRICTS = [
    ("070101", "Callao"),
    ("070102", "Bellavista"),
    ("070103", "Carmen de la Legua Reynoso"),
    ("070104", "La Perla"),
    ("070105", "La Punta"),
    ("070106", "Ventanilla"),
    ("070107", "Mi Perú"),
]

# zone name, description, districts, [(group name, description, order, [rates])]
ZONES = [
    (
        "Lima Metropolitana",
        "Zona central de Lima con entregas rápidas",
        LIMA_DISTRICTS,
        [
            ("Envíos Standard", "Opciones de envío estándar y express", 1, [
                dict(name="Standard Diurno", description="Entrega en horario de oficina (9am-6pm)",
                     base_cost=15, estimated_days="2 días", time_window="9am-6pm", order=1),
                dict(name="Standard Nocturno", description="Entrega en horario nocturno (7pm-10pm)",
                     base_cost=15, estimated_days="2 días", time_window="7pm-10pm", order=2),
                dict(name="Express", description="Entrega en 24 horas",
                     base_cost=25, estimated_days="24 horas", order=3),
                dict(name="Standard Gratis", description="Envío gratis en compras mayores",
                     base_cost=0, free_shipping_min=699, estimated_days="3 días", order=4),
            ]),
            ("Envíos por Courier", "Envíos con couriers reconocidos", 2, [
                dict(name="Cruz del Sur", description="Courier nacional confiable",
                     base_cost=25, estimated_days="2 días", carrier="Cruz del Sur", order=1),
                dict(name="Shalom", description="Envíos rápidos a nivel nacional",
                     base_cost=25, estimated_days="2 días", carrier="Shalom", order=2),
                dict(name="Olva", description="Courier económico",
                     base_cost=20, estimated_days="3 días", carrier="Olva", order=3),
                dict(name="Gratis Cruz del Sur", description="Envío gratis con Cruz del Sur",
                     base_cost=0, free_shipping_min=699, estimated_days="3 días",
                     carrier="Cruz del Sur", order=4),
            ]),
        ],
    ),
    (
        "Callao",
        "Provincia Constitucional del Callao",
        CALLAO_DISTRICTS,
        [
            ("Envíos Callao", "Envíos dentro del Callao", 1, [
                dict(name="Express Callao", description="Entrega en 24-48 horas",
                     base_cost=18, estimated_days="1-2 días", order=1),
                dict(name="Standard Callao", description="Entrega en 2-3 días",
                     base_cost=12, estimated_days="2-3 días", order=2),
                dict(name="Gratis Callao", description="Envío gratis en compras mayores",
                     base_cost=0, free_shipping_min=500, estimated_days="3 días", order=3),
            ]),
        ],
    ),
]

RATE_COLUMNS = (
    "name", "description", "base_cost", "free_shipping_min",
    "estimated_days", "carrier", "time_window", "order",
)


def _insert_returning_id(conn, sql: str, **params) -> int:
    return conn.execute(sa.text(sql + " RETURNING id").bindparams(**params)).scalar_one()


def upgrade() -> None:
    conn = op.get_bind()

    department_ids = {}
    for code, name in DEPARTMENTS:
        department_ids[code] = _insert_returning_id(
            conn, "INSERT INTO departments (code, name) VALUES (:code, :name)", code=code, name=name
        )

    province_ids = {}
    for code, name, department_code in PROVINCES:
        province_ids[code] = _insert_returning_id(
            conn,
            "INSERT INTO provinces (code, name, department_id) VALUES (:code, :name, :department_id)",
            code=code, name=name, department_id=department_ids[department_code],
        )

    for code, name in LIMA_DISTRICTS + CALLAO_DISTRICTS:
        conn.execute(
            sa.text(
                "INSERT INTO districts (code, name, province_id) VALUES (:code, :name, :province_id)"
            ).bindparams(code=code, name=name, province_id=province_ids[code[:4]])
        )

    for zone_name, zone_description, districts, groups in ZONES:
        zone_id = _insert_returning_id(
            conn,
            "INSERT INTO shipping_zones (name, description, active) VALUES (:name, :description, true)",
            name=zone_name, description=zone_description,
        )
        for code, _ in districts:
            conn.execute(
                sa.text(
                    "INSERT INTO shipping_zone_districts (zone_id, district_code) VALUES (:zone_id, :code)"
                ).bindparams(zone_id=zone_id, code=code)
            )
        for group_name, group_description, group_order, rates in groups:
            group_id = _insert_returning_id(
                conn,
                'INSERT INTO shipping_rate_groups (zone_id, name, description, "order", active) '
                "VALUES (:zone_id, :name, :description, :order, true)",
                zone_id=zone_id, name=group_name, description=group_description, order=group_order,
            )
            for rate in rates:
                params = {column: rate.get(column) for column in RATE_COLUMNS}
                conn.execute(
                    sa.text(
                        "INSERT INTO shipping_rates (group_id, name, description, base_cost, free_shipping_min, "
                        'estimated_days, carrier, time_window, "order", active) '
                        "VALUES (:group_id, :name, :description, :base_cost, :free_shipping_min, "
                        ":estimated_days, :carrier, :time_window, :order, true)"
                    ).bindparams(group_id=group_id, **params)
                )


def downgrade() -> None:
    zone_names = [zone[0] for zone in ZONES]
    op.execute(
        sa.text("DELETE FROM shipping_zones WHERE name IN :names")
        .bindparams(sa.bindparam("names", value=zone_names, expanding=True))
    )
    district_codes = [code for code, _ in LIMA_DISTRICTS + CALLAO_DISTRICTS]
    op.execute(
        sa.text("DELETE FROM districts WHERE code IN :codes")
        .bindparams(sa.bindparam("codes", value=district_codes, expanding=True))
    )
    op.execute(
        sa.text("DELETE FROM provinces WHERE code IN :codes")
        .bindparams(sa.bindparam("codes", value=[p[0] for p in PROVINCES], expanding=True))
    )
    op.execute(
        sa.text("DELETE FROM departments WHERE code IN :codes")
        .bindparams(sa.bindparam("codes", value=[d[0] for d in DEPARTMENTS], expanding=True))
    )
