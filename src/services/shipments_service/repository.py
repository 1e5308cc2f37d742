import json
from typing import Any, List, Optional
from uuid import UUID

from src.infra.database import DatabaseManager
from src.shared.models.location_dto import LocationDTO
from src.shared.models.shipment_dto import ShipmentDTO

# Поля, которые разрешено менять после создания
UPDATABLE_COLUMNS = frozenset({"status", "trip_id"})


class ShipmentRepository:
    """
    Хранилище отправлений поверх PostgreSQL.
    Каждый метод — один SQL-оператор, атомарный на стороне БД.
    """

    def __init__(self, db: DatabaseManager):
        self.db = db

    async def insert(self, shipment: ShipmentDTO) -> ShipmentDTO:
        """Inserts a new shipment and returns the stored record."""
        pickup = shipment.pickup_location
        delivery = shipment.delivery_location

        row = await self.db.fetchrow(
            """
            INSERT INTO shipments (
                id, client_id, description, weight_kg, volume_m3,
                pickup_lat, pickup_lon, pickup_address,
                delivery_lat, delivery_lon, delivery_address,
                photos, policy_accepted, status, trip_id, created_at
            )
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12::jsonb, $13, $14, $15, $16)
            RETURNING *
            """,
            shipment.id,
            shipment.client_id,
            shipment.description,
            shipment.weight_kg,
            shipment.volume_m3,
            pickup.lat,
            pickup.lon,
            pickup.address,
            delivery.lat if delivery else None,
            delivery.lon if delivery else None,
            delivery.address if delivery else None,
            json.dumps(shipment.photos),
            shipment.policy_accepted,
            str(shipment.status),
            shipment.trip_id,
            shipment.created_at,
        )
        return self._row_to_dto(row)

    async def find_one(self, shipment_id: str) -> Optional[ShipmentDTO]:
        """Retrieves a shipment by primary key."""
        if not _is_uuid(shipment_id):
            return None
        row = await self.db.fetchrow("SELECT * FROM shipments WHERE id = $1", shipment_id)
        return self._row_to_dto(row) if row else None

    async def find_many(
        self,
        client_id: Optional[str] = None,
        trip_id: Optional[str] = None,
        order_by_created_at: bool = False,
    ) -> List[ShipmentDTO]:
        """Returns shipments matching every given filter."""
        clauses = []
        params: List[Any] = []
        if client_id is not None:
            params.append(client_id)
            clauses.append(f"client_id = ${len(params)}")
        if trip_id is not None:
            params.append(trip_id)
            clauses.append(f"trip_id = ${len(params)}")

        query = "SELECT * FROM shipments"
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        if order_by_created_at:
            query += " ORDER BY created_at DESC"

        rows = await self.db.fetch(query, *params)
        return [self._row_to_dto(row) for row in rows]

    async def update(self, shipment_id: str, **fields: Any) -> Optional[ShipmentDTO]:
        """Patches the given columns and returns the updated record, or None if absent."""
        unknown = set(fields) - UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Columns are not updatable: {', '.join(sorted(unknown))}")
        if not fields:
            raise ValueError("Nothing to update")
        if not _is_uuid(shipment_id):
            return None

        set_clauses = []
        params: List[Any] = [shipment_id]
        for column, value in fields.items():
            params.append(str(value) if column == "status" else value)
            set_clauses.append(f"{column} = ${len(params)}")

        row = await self.db.fetchrow(
            f"UPDATE shipments SET {', '.join(set_clauses)} WHERE id = $1 RETURNING *",
            *params,
        )
        return self._row_to_dto(row) if row else None

    def _row_to_dto(self, row) -> ShipmentDTO:
        photos = row["photos"]
        if isinstance(photos, (str, bytes)):
            photos = json.loads(photos)

        delivery = None
        if row["delivery_lat"] is not None and row["delivery_lon"] is not None:
            delivery = LocationDTO(
                lat=row["delivery_lat"],
                lon=row["delivery_lon"],
                address=row["delivery_address"],
            )

        return ShipmentDTO(
            id=str(row["id"]),
            client_id=row["client_id"],
            description=row["description"],
            weight_kg=row["weight_kg"],
            volume_m3=row["volume_m3"],
            pickup_location=LocationDTO(
                lat=row["pickup_lat"],
                lon=row["pickup_lon"],
                address=row["pickup_address"],
            ),
            delivery_location=delivery,
            photos=photos or [],
            policy_accepted=row["policy_accepted"],
            status=row["status"],
            trip_id=row["trip_id"],
            created_at=row["created_at"],
        )


def _is_uuid(value: str) -> bool:
    try:
        UUID(str(value))
    except ValueError:
        return False
    return True
