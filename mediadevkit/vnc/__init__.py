"""An RFB (VNC) protocol client with raw, zlib and cursor encodings."""