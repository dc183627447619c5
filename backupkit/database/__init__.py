"""Database dump steps, one class per kind of database, and the runner that drives them."""