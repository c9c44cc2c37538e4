"""Example usage of the memtables library."""

from memtables import AnyDatabase, DatabaseError, parse

# Every table in a database shares one primary key type
db = AnyDatabase.for_key_type("int")

statements = [
    "CREATE people KEY id FIELDS id:Int, job:String, height:Float, age:Int, sex:String",
    'INSERT id=3, job="teacher", height=165.5, age=41, sex="female" INTO people',
    'INSERT id=1, job="fire fighter", height=180.0, age=30, sex="male" INTO people',
    'INSERT id=2, job="actor", height=175.0, age=24, sex="female" INTO people',
]

for statement in statements:
    print(db.execute(parse(statement)))

# Rows come back ordered by primary key
print("\nAll people:")
print(db.execute(parse("SELECT id, job, age FROM people")))

print("\nYounger than 30:")
print(db.execute(parse("SELECT job FROM people WHERE age < 30")))

# Failures are reported as DatabaseError subclasses
for statement in ("INSERT id=1, job=\"x\", height=1.0, age=1, sex=\"x\" INTO people",
                  'DELETE "1" FROM people',
                  "SELECT job FROM nobody"):
    try:
        db.execute(parse(statement))
    except DatabaseError as e:
        print(f"{type(e).__name__}: {e}")

print(db.execute(parse("DELETE 2 FROM people")))
print(db.execute(parse("SELECT id, job FROM people")))
