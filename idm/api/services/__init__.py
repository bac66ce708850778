# This file marks the services package for record business logic.
# Services validate input, run transactions, and classify failures into domain error kinds.
