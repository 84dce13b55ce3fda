"""Repository for client operations."""

import io
from typing import BinaryIO, Dict, List, Tuple

import pandas as pd
from sqlalchemy import or_

from components.client.models import Client
from components.core.repository import OwnedRepository

IMPORT_COLUMNS = ["name", "email", "phone", "tax_id", "address", "notes"]


class ClientRepository(OwnedRepository):
    """Repository for client operations."""

    model = Client
    default_sort = "name"

    async def search(self, term: str, limit: int = 500) -> List[Client]:
        """Clients whose name, email or phone contains ``term``."""
        pattern = f"%{term.strip()}%"
        query = (
            self._scoped()
            .where(or_(
                Client.name.ilike(pattern),
                Client.email.ilike(pattern),
                Client.phone.ilike(pattern),
            ))
            .order_by(Client.name.asc())
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def import_from_csv(self, file_content: BinaryIO) -> Tuple[bool, str, int, List[Dict]]:
        """
        Import clients from a CSV file.

        The file needs a ``name`` column; ``email``, ``phone``, ``tax_id``,
        ``address`` and ``notes`` are optional. All rows are validated first
        and nothing is inserted when any row fails.

        Returns:
            Tuple containing:
            - Success status (bool)
            - Message (str)
            - Number of imported clients (int)
            - List of errors if any (List[Dict])
        """
        try:
            frame = pd.read_csv(
                io.BytesIO(file_content.read()),
                dtype=str,
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            return False, f"Error processing file: {e}", 0, []

        frame.columns = [str(column).strip().lower() for column in frame.columns]
        if "name" not in frame.columns:
            return False, "CSV file must contain a 'name' column", 0, []

        errors = []
        rows = []
        for row_num, row in enumerate(frame.to_dict(orient="records"), start=2):  # header is row 1
            fields = {
                column: (None if pd.isna(row.get(column)) else str(row[column]).strip())
                for column in IMPORT_COLUMNS
                if column in frame.columns
            }
            if not fields.get("name"):
                errors.append({"row": row_num, "message": "Name cannot be empty"})
                continue
            rows.append(fields)

        if errors:
            return False, "Validation errors occurred", 0, errors

        for fields in rows:
            self.session.add(Client(owner_id=self.owner_id, **fields))
        await self.session.commit()
        return True, "Clients imported successfully", len(rows), []
