"""Create database schema and seed sample properties for development."""
from __future__ import annotations

import asyncio

from properties_api.core.config import get_settings
from properties_api.db.session import Database
from properties_api.models.property import Property

PROPERTIES = [
	{
		"id": "prop-park-vista",
		"name": "Park Vista Residences",
		"location": "92 Clifton Block 5, Karachi",
		"brochure": "https://example.com/brochures/park-vista.pdf",
		"image": "https://picsum.photos/seed/parkvista/800/600",
		"model3d": None,
		"available_apartments": 12,
		"status": "available",
	},
	{
		"id": "prop-seaview-lofts",
		"name": "Seaview Lofts",
		"location": "18 Do Talwar, Karachi",
		"brochure": None,
		"image": "https://picsum.photos/seed/seaview/800/600",
		"model3d": "https://example.com/models/seaview.glb",
		"available_apartments": 4,
		"status": "available",
	},
	{
		"id": "prop-gulshan-court",
		"name": "Gulshan Court",
		"location": "Block 7, Gulshan-e-Iqbal, Karachi",
		"brochure": None,
		"image": None,
		"model3d": None,
		"available_apartments": 0,
		"status": "sold",
	},
]


async def seed_properties(database: Database) -> None:
	"""Insert or update demo properties."""

	async with database.session_factory() as session:
		async with session.begin():
			for prop in PROPERTIES:
				property_obj = await session.get(Property, prop["id"])
				if property_obj is None:
					session.add(Property(**prop))
				else:
					for column, value in prop.items():
						setattr(property_obj, column, value)


async def main() -> None:
	database = Database.from_settings(get_settings())
	try:
		await database.connect()
		await database.create_all()
		await seed_properties(database)
	finally:
		await database.dispose()
	print("Database schema ensured and demo properties seeded.")


if __name__ == "__main__":
	asyncio.run(main())
