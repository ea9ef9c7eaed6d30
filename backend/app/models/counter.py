# app/models/counter.py
from tortoise import connections, fields, models
from tortoise.expressions import F
from tortoise.transactions import in_transaction

class Counter(models.Model):
    """
    Named sequence.
    - name: sequence identifier (e.g. "itemNums")
    - seq: last value handed out
    """
    name = fields.CharField(max_length=64, pk=True)
    seq = fields.BigIntField(default=0)

    class Meta:
        table = "counters"

    @classmethod
    async def next_value(cls, name: str, connection_name: str = "default", start: int = 1) -> int:
        """Atomically advance sequence ``name`` and return the new value."""
        # get_or_create absorbs the IntegrityError of a concurrent first insert
        await cls.get_or_create(
            name=name,
            defaults={"seq": start - 1},
            using_db=connections.get(connection_name),
        )
        async with in_transaction(connection_name) as conn:
            await cls.filter(name=name).using_db(conn).update(seq=F("seq") + 1)
            row = await cls.get(name=name, using_db=conn)
            return row.seq
