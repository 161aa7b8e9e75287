"""St Saviour's parish website: public site and content admin."""
