from cvtailor.cli import main

raise SystemExit(main())
