"""Names of the MongoDB collections used by the bookstore clients."""

AUTHORS = "authors"
BOOKS = "books"
BOOKSTORES = "bookstores"
