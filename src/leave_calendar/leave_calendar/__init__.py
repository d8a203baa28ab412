"""Leave Calendar package.

Feature modules (vacation rules, leaves, ...) behind a thin Flask controller
layer, with service/repository layers underneath.
"""
