"""Intermediate representation, its builder and the constant-folding optimizer."""