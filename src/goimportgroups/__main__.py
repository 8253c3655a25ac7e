from goimportgroups.runner import main

raise SystemExit(main())
