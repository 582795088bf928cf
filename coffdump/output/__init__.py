"""Text, table and JSON presentation of decoded images."""
