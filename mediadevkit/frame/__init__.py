"""Decoders that turn raw camera frames into images."""