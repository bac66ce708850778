# This file marks the repositories package for SQL access modules.
# Repositories run statements against the store and return plain records.
