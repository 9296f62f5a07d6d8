from sqlalchemy.orm import Session
from sqlalchemy import text


class SalesRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_all_sales(self) -> list[dict]:
        """
        Fetches created_at and total_price for every row of the sales table.
        The forecast does its own date filtering, so no range is applied here.
        """
        query_str = """
            SELECT
                s.created_at AS created_at,
                s.total_price AS total_price
            FROM sales s
            ORDER BY s.created_at DESC
        """

        result = self.db.execute(text(query_str))

        return [dict(row._mapping) for row in result]
