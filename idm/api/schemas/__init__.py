# This file marks the schemas package for API request and response models.
# Models here describe the JSON contract the routers accept and return.
